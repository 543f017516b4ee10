from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.domain.entities import DeviceType, Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: int) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Insert a new session. Raises SessionConflictError on a duplicate refresh token."""
        pass

    @abstractmethod
    async def find_active_by_refresh_token(self, refresh_token: str) -> Optional[Session]:
        """Find the non-revoked session bound to this refresh token (expiry not checked)"""
        pass

    @abstractmethod
    async def get_active_by_user_id(
        self,
        user_id: int,
        now: datetime,
        device_type: Optional[DeviceType] = None,
    ) -> List[Session]:
        """Get non-revoked, non-expired sessions for a user"""
        pass

    @abstractmethod
    async def count_active_by_user_id(self, user_id: int, now: datetime) -> int:
        """Count non-revoked, non-expired sessions for a user"""
        pass

    @abstractmethod
    async def revoke_by_id(self, session_id: int, now: datetime) -> bool:
        """Revoke one session. Returns True if this call flipped it to revoked."""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: int, now: datetime) -> int:
        """Revoke all unrevoked sessions for a user. Returns count of revoked sessions."""
        pass

    @abstractmethod
    async def revoke_expired(self, now: datetime) -> int:
        """Revoke every unrevoked session with expires_at < now. Returns count."""
        pass

    @abstractmethod
    async def touch_last_used(self, session_id: int, used_at: datetime) -> bool:
        """Move last_used_at forward to used_at. Returns False if nothing changed."""
        pass
