from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field, model_validator

from src.api.error import raise_for_error
from src.app.services.auth_orchestrator import AuthOrchestrator
from src.app.use_cases.auth import AuthResponse, LoginCommand, Principal, RegisterCommand
from src.depends import get_auth_orchestrator, get_current_principal
from src.domain.entities import DeviceType

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    API layer responsibility: HTTP validation and serialization.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, max_length=72, description="User password (8-72 chars)")
    phone: Optional[str] = Field(default=None, max_length=32, description="Phone number")
    device_info: Optional[str] = Field(default=None, max_length=255)
    device_type: Optional[DeviceType] = Field(default=None, description="ANDROID, IOS, WEB or DESKTOP")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def register(
    request: RegisterRequest,
    http_request: Request,
    orchestrator: AuthOrchestrator = Depends(get_auth_orchestrator),
):
    """
    Register

    Creates the user with the default CUSTOMER role and returns an
    access + refresh token pair bound to a new session.

    Raises:
        - 409 Conflict: Email or phone already in use
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 503 Service Unavailable: Store unavailable
    """
    command = RegisterCommand(
        email=request.email,
        password=request.password,
        phone=request.phone,
        device_info=request.device_info,
        device_type=request.device_type,
        ip_address=_client_ip(http_request),
    )

    result = await orchestrator.register(command)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Either email or phone identifies the user.
    """

    email: Optional[EmailStr] = Field(default=None, description="User email address")
    phone: Optional[str] = Field(default=None, max_length=32, description="Phone number")
    password: str = Field(..., max_length=72, description="User password")
    device_info: Optional[str] = Field(default=None, max_length=255)
    device_type: Optional[DeviceType] = Field(default=None)

    @model_validator(mode="after")
    def require_identifier(self):
        if not self.email and not self.phone:
            raise ValueError("email or phone is required")
        return self


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    orchestrator: AuthOrchestrator = Depends(get_auth_orchestrator),
):
    """
    Login

    Verifies credentials and opens a new session. Sessions on other
    devices stay active.

    Raises:
        - 401 Unauthorized: Invalid credentials or inactive account
        - 503 Service Unavailable: Store unavailable
    """
    command = LoginCommand(
        email=request.email,
        phone=request.phone,
        password=request.password,
        device_info=request.device_info,
        device_type=request.device_type,
        ip_address=_client_ip(http_request),
    )

    result = await orchestrator.login(command)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def refresh(
    request: RefreshRequest,
    orchestrator: AuthOrchestrator = Depends(get_auth_orchestrator),
):
    """
    Refresh Access Token

    Returns a new access token and the same refresh token.

    Raises:
        - 401 Unauthorized: INVALID_TOKEN, SESSION_REVOKED or SESSION_EXPIRED
        - 503 Service Unavailable: Store unavailable
    """
    result = await orchestrator.refresh(request.refresh_token)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LogoutRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token of the session to close")


class MessageResponse(BaseModel):
    message: str


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def logout(
    request: LogoutRequest,
    orchestrator: AuthOrchestrator = Depends(get_auth_orchestrator),
):
    """
    Logout

    Best effort: succeeds even when no active session matches the token.
    """
    result = await orchestrator.logout(request.refresh_token)
    if result.is_err():
        raise_for_error(result.error)

    return {"message": "Logged out"}


class LogoutAllResponse(BaseModel):
    message: str
    revoked_count: int


@router.post("/logout-all", status_code=status.HTTP_200_OK, response_model=LogoutAllResponse)
async def logout_all(
    principal: Principal = Depends(get_current_principal),
    orchestrator: AuthOrchestrator = Depends(get_auth_orchestrator),
):
    """
    Logout From All Devices

    Revokes every session of the authenticated user.

    Raises:
        - 401 Unauthorized: Missing or invalid access token
    """
    result = await orchestrator.logout_all_devices(principal)
    if result.is_err():
        raise_for_error(result.error)

    data = result.value
    return {
        "message": f"Successfully revoked {data.revoked_count} session(s)",
        "revoked_count": data.revoked_count,
    }
