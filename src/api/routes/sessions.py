from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.error import raise_for_error
from src.app.services.auth_orchestrator import AuthOrchestrator
from src.app.use_cases.auth import Principal
from src.app.use_cases.sessions import ActiveSessionsResponse
from src.depends import get_auth_orchestrator, get_current_principal
from src.domain.entities import DeviceType

router = APIRouter(prefix="/sessions", tags=["Sessions"])


class RevokeSpecificSessionResponse(BaseModel):
    """Response for specific session revocation"""

    message: str
    session_id: int


@router.get("", status_code=status.HTTP_200_OK, response_model=ActiveSessionsResponse)
async def list_sessions(
    device_type: Optional[DeviceType] = None,
    principal: Principal = Depends(get_current_principal),
    orchestrator: AuthOrchestrator = Depends(get_auth_orchestrator),
):
    """
    List Active Sessions

    Returns the caller's non-revoked, non-expired sessions, newest first,
    optionally filtered by device type.
    """
    result = await orchestrator.list_sessions(principal, device_type)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSpecificSessionResponse,
)
async def revoke_specific_session(
    session_id: int,
    principal: Principal = Depends(get_current_principal),
    orchestrator: AuthOrchestrator = Depends(get_auth_orchestrator),
):
    """
    Revoke Specific Session

    Logs out one device. Revoking an already revoked session succeeds.

    Raises:
        - 403 Forbidden: Session belongs to another user
        - 404 Not Found: Session not found
    """
    result = await orchestrator.revoke_session(principal, session_id)
    if result.is_err():
        raise_for_error(result.error)

    return {"message": "Session revoked successfully", "session_id": session_id}
