"""
Logout Use Case

Best-effort revocation of the session behind one refresh token.
"""

from libs.result import Result, Return
from src.app.errors import store_unavailable_as_error
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork


class LogoutUseCase:
    """
    Business Rules:
    - Revokes the matching non-revoked session, if any
    - Never fails for an unknown, revoked or undecodable token
    """

    def __init__(self, uow: UnitOfWork, session_store: SessionStore):
        self.uow = uow
        self.session_store = session_store

    @store_unavailable_as_error
    async def execute(self, refresh_token: str) -> Result[None]:
        async with self.uow:
            session = await self.session_store.find_active_by_refresh_token(refresh_token)
            if session is not None:
                await self.session_store.revoke(session.id)
                await self.uow.commit()

            return Return.ok(None)
