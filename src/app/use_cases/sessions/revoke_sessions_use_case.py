"""
Revoke Sessions Use Case

Session management for the authenticated principal: logout from all
devices, revoke one device, list active devices.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.errors import ErrorCode, store_unavailable_as_error
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Principal
from src.domain.entities import DeviceType
from .dtos import ActiveSessionsResponse, RevokeAllSessionsResponse, SessionInfo

logger = logging.getLogger(__name__)


class RevokeSessionsUseCase:
    """
    Use case for managing a user's own sessions.

    Business Rules:
    - The caller is always passed explicitly as a Principal
    - Users can only see and revoke their own sessions
    - Revoke-all is one bulk update and is unconditional
    """

    def __init__(self, uow: UnitOfWork, session_store: SessionStore):
        self.uow = uow
        self.session_store = session_store

    @store_unavailable_as_error
    async def revoke_all_sessions(
        self, principal: Principal
    ) -> Result[RevokeAllSessionsResponse]:
        """
        Revoke every session of the principal (logout from all devices).

        Returns:
            Result with the number of sessions revoked by this call
        """
        async with self.uow:
            count = await self.session_store.revoke_all_for_user(principal.user_id)
            await self.uow.commit()

            return Return.ok(
                RevokeAllSessionsResponse(user_id=principal.user_id, revoked_count=count)
            )

    @store_unavailable_as_error
    async def revoke_specific_session(
        self, principal: Principal, session_id: int
    ) -> Result[None]:
        async with self.uow:
            session = await self.session_store.get(session_id)
            if session is None:
                return Return.err(
                    Error(ErrorCode.SESSION_NOT_FOUND.value, "Session not found")
                )

            if session.user_id != principal.user_id:
                logger.warning(
                    f"User {principal.user_id} tried to revoke session {session_id} "
                    f"owned by user {session.user_id}"
                )
                return Return.err(
                    Error(ErrorCode.FORBIDDEN.value, "Session does not belong to current user")
                )

            await self.session_store.revoke(session_id)
            await self.uow.commit()

            return Return.ok(None)

    @store_unavailable_as_error
    async def list_active_sessions(
        self, principal: Principal, device_type: Optional[DeviceType] = None
    ) -> Result[ActiveSessionsResponse]:
        async with self.uow:
            sessions = await self.session_store.list_active(principal.user_id, device_type)

            return Return.ok(
                ActiveSessionsResponse(
                    active_count=len(sessions),
                    sessions=[SessionInfo.from_session(s) for s in sessions],
                )
            )
