"""
Sweep Expired Sessions Use Case

Periodic batch revocation of sessions past their expiry.
"""

import logging

from libs.result import Result, Return
from src.app.errors import store_unavailable_as_error
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from .dtos import SweepResponse

logger = logging.getLogger(__name__)


class SweepExpiredSessionsUseCase:
    """
    Business Rules:
    - Only moves sessions from active to revoked, so it is safe to run
      alongside live traffic and alongside itself
    - A second run with no new expiries revokes nothing
    """

    def __init__(self, uow: UnitOfWork, session_store: SessionStore):
        self.uow = uow
        self.session_store = session_store

    @store_unavailable_as_error
    async def execute(self) -> Result[SweepResponse]:
        async with self.uow:
            now = self.session_store.clock.now()
            count = await self.session_store.sweep_expired(now)
            await self.uow.commit()

            if count:
                logger.info(f"Session sweep revoked {count} expired session(s)")
            return Return.ok(SweepResponse(revoked_count=count, swept_at=now))
