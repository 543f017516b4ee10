"""
Session Management DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import DeviceType, Session


class SessionInfo(BaseModel):
    """One active session as shown to its owner"""

    id: int
    device_info: Optional[str] = None
    device_type: Optional[DeviceType] = None
    ip_address: Optional[str] = None
    created_at: datetime
    last_used_at: Optional[datetime] = None
    expires_at: datetime

    @classmethod
    def from_session(cls, session: Session) -> "SessionInfo":
        return cls(
            id=session.id,
            device_info=session.device_info,
            device_type=session.device_type,
            ip_address=session.ip_address,
            created_at=session.created_at,
            last_used_at=session.last_used_at,
            expires_at=session.expires_at,
        )


class ActiveSessionsResponse(BaseModel):
    active_count: int
    sessions: List[SessionInfo]


class RevokeAllSessionsResponse(BaseModel):
    user_id: int
    revoked_count: int


class SweepResponse(BaseModel):
    revoked_count: int
    swept_at: datetime
