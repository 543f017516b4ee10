"""
Session Store

Bookkeeping for refresh-token-backed sessions. Refresh tokens are opaque
strings here: the store matches them by value and never decodes them.

The store works inside the caller's unit of work and never commits.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from libs.result import Error, Result, Return
from src.app.errors import ErrorCode, SessionConflictError
from src.app.repositories.session_repository import ISessionRepository
from src.app.services.clock import IClock
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import DeviceType, Session

logger = logging.getLogger(__name__)

SESSION_TTL = timedelta(days=7)


class SessionStore:
    """
    Session lifecycle over the session repository.

    Business Rules:
    - One session per issued refresh token; the token value is unique
    - revoked only moves False -> True, every revoke is a guarded UPDATE
    - Session expiry (session_ttl) is configured apart from the token TTL
    - Active means revoked is False and expires_at > now
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: IClock,
        session_ttl: timedelta = SESSION_TTL,
    ):
        self.uow = uow
        self.clock = clock
        self.session_ttl = session_ttl

    @property
    def _sessions(self) -> ISessionRepository:
        # Repositories only exist once the unit of work has been entered
        return self.uow.sessions

    async def create(
        self,
        user_id: int,
        refresh_token: str,
        device_info: Optional[str] = None,
        device_type: Optional[DeviceType] = None,
        ip_address: Optional[str] = None,
    ) -> Result[Session]:
        """
        Open a new active session for a freshly issued refresh token.

        Returns:
            Result with the persisted Session, or Error(SESSION_CONFLICT) if
            the refresh token is already bound to a session
        """
        now = self.clock.now()
        session = Session(
            user_id=user_id,
            refresh_token=refresh_token,
            device_info=device_info,
            device_type=device_type,
            ip_address=ip_address,
            revoked=False,
            created_at=now,
            last_used_at=now,
            updated_at=now,
            expires_at=now + self.session_ttl,
        )
        try:
            session = await self._sessions.create(session)
        except SessionConflictError:
            logger.error(f"Refresh token collision while creating session for user {user_id}")
            return Return.err(
                Error(ErrorCode.SESSION_CONFLICT.value, "Refresh token is already in use")
            )

        logger.info(f"Session {session.id} created for user {user_id}")
        return Return.ok(session)

    async def get(self, session_id: int) -> Optional[Session]:
        return await self._sessions.get_by_id(session_id)

    async def revoke(self, session_id: int) -> None:
        """Revoke one session. Idempotent, silent if it does not exist."""
        if await self._sessions.revoke_by_id(session_id, self.clock.now()):
            logger.info(f"Session {session_id} revoked")

    async def revoke_all_for_user(self, user_id: int) -> int:
        count = await self._sessions.revoke_all_by_user_id(user_id, self.clock.now())
        logger.info(f"Revoked {count} session(s) for user {user_id}")
        return count

    async def find_active_by_refresh_token(self, refresh_token: str) -> Optional[Session]:
        """
        Non-revoked session for this token. Expiry is NOT checked: callers
        must tell "revoked" and "expired" apart themselves.
        """
        return await self._sessions.find_active_by_refresh_token(refresh_token)

    async def is_valid(self, refresh_token: str) -> bool:
        session = await self._sessions.find_active_by_refresh_token(refresh_token)
        return session is not None and session.is_active(self.clock.now())

    async def touch_last_used(self, session_id: int, used_at: datetime) -> None:
        await self._sessions.touch_last_used(session_id, used_at)

    async def sweep_expired(self, now: datetime) -> int:
        """Revoke every unrevoked session past its expiry. Returns count."""
        return await self._sessions.revoke_expired(now)

    async def count_active(self, user_id: int, now: datetime) -> int:
        return await self._sessions.count_active_by_user_id(user_id, now)

    async def list_active(
        self, user_id: int, device_type: Optional[DeviceType] = None
    ) -> List[Session]:
        return await self._sessions.get_active_by_user_id(
            user_id, self.clock.now(), device_type
        )
