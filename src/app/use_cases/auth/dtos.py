"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import DeviceType, User


# ============================================================================
# Commands
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    email: str
    password: str
    phone: Optional[str] = None
    device_info: Optional[str] = None
    device_type: Optional[DeviceType] = None
    ip_address: Optional[str] = None


class LoginCommand(BaseModel):
    """Login command - email takes precedence over phone when both are set"""

    password: str
    email: Optional[str] = None
    phone: Optional[str] = None
    device_info: Optional[str] = None
    device_type: Optional[DeviceType] = None
    ip_address: Optional[str] = None


class Principal(BaseModel):
    """Authenticated caller, built from a verified access token"""

    user_id: int


# ============================================================================
# Response DTOs
# ============================================================================


class AuthResponse(BaseModel):
    """Token pair plus profile returned by register, login and refresh"""

    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int
    user_id: int
    email: str
    phone: Optional[str] = None
    roles: List[str]
    session_id: Optional[int] = None

    @classmethod
    def for_user(
        cls,
        user: User,
        access_token: str,
        refresh_token: str,
        expires_in: int,
        session_id: Optional[int],
    ) -> "AuthResponse":
        return cls(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=expires_in,
            user_id=user.id,
            email=user.email,
            phone=user.phone,
            roles=user.role_names(),
            session_id=session_id,
        )
