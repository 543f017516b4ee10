from datetime import datetime
from typing import List, Optional

from sqlalchemy import case, func, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.db_errors import translate_db_errors
from src.app.errors import SessionConflictError
from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import DeviceType, Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_db_errors
    async def get_by_id(self, session_id: int) -> Optional[Session]:
        """Get session by ID"""
        stmt = select(Session).where(Session.id == session_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @translate_db_errors
    async def create(self, session_obj: Session) -> Session:
        """Create a new session; the unique index on refresh_token arbitrates races"""
        self.session.add(session_obj)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise SessionConflictError("Refresh token already bound to a session") from exc
        await self.session.refresh(session_obj)
        return session_obj

    @translate_db_errors
    async def find_active_by_refresh_token(self, refresh_token: str) -> Optional[Session]:
        """
        Find the non-revoked session for this refresh token.

        Expiry is not filtered here - the caller distinguishes revoked from
        expired so it can return the right error.
        """
        stmt = select(Session).where(
            Session.refresh_token == refresh_token,
            Session.revoked == False,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @translate_db_errors
    async def get_active_by_user_id(
        self,
        user_id: int,
        now: datetime,
        device_type: Optional[DeviceType] = None,
    ) -> List[Session]:
        """Get non-revoked, non-expired sessions for a user, newest first"""
        stmt = select(Session).where(
            Session.user_id == user_id,
            Session.revoked == False,
            Session.expires_at > now,
        )
        if device_type is not None:
            stmt = stmt.where(Session.device_type == device_type)
        stmt = stmt.order_by(Session.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    @translate_db_errors
    async def count_active_by_user_id(self, user_id: int, now: datetime) -> int:
        stmt = select(func.count(Session.id)).where(
            Session.user_id == user_id,
            Session.revoked == False,
            Session.expires_at > now,
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    @translate_db_errors
    async def revoke_by_id(self, session_id: int, now: datetime) -> bool:
        """Revoke a specific session and pull its expiry back to now (never later)"""
        stmt = (
            update(Session)
            .where(Session.id == session_id, Session.revoked == False)
            .values(
                revoked=True,
                expires_at=case(
                    (Session.expires_at > now, now), else_=Session.expires_at
                ),
                updated_at=now,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    @translate_db_errors
    async def revoke_all_by_user_id(self, user_id: int, now: datetime) -> int:
        """Revoke all unrevoked sessions for a user in one statement; expiry as in revoke_by_id"""
        stmt = (
            update(Session)
            .where(Session.user_id == user_id, Session.revoked == False)
            .values(
                revoked=True,
                expires_at=case(
                    (Session.expires_at > now, now), else_=Session.expires_at
                ),
                updated_at=now,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    @translate_db_errors
    async def revoke_expired(self, now: datetime) -> int:
        stmt = (
            update(Session)
            .where(Session.expires_at < now, Session.revoked == False)
            .values(revoked=True, updated_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    @translate_db_errors
    async def touch_last_used(self, session_id: int, used_at: datetime) -> bool:
        stmt = (
            update(Session)
            .where(
                Session.id == session_id,
                or_(Session.last_used_at.is_(None), Session.last_used_at < used_at),
            )
            .values(last_used_at=used_at, updated_at=used_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
