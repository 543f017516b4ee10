"""
Background task that periodically revokes expired sessions.
"""

import asyncio
import logging
from datetime import timedelta
from typing import Callable, Optional

from src.app.services.clock import IClock
from src.app.services.session_store import SESSION_TTL, SessionStore
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.sessions import SweepExpiredSessionsUseCase

logger = logging.getLogger(__name__)


class SessionSweeper:
    """
    Runs SweepExpiredSessionsUseCase every ``interval_seconds`` on the event loop.

    Each tick gets a fresh unit of work from ``uow_factory``. A failing tick
    is logged and the loop carries on with the next one.
    """

    def __init__(
        self,
        uow_factory: Callable[[], SqlAlchemyUnitOfWork],
        clock: IClock,
        interval_seconds: float = 300,
        session_ttl: timedelta = SESSION_TTL,
    ):
        self.uow_factory = uow_factory
        self.clock = clock
        self.interval_seconds = interval_seconds
        self.session_ttl = session_ttl
        self._task: Optional[asyncio.Task] = None

    async def run_once(self) -> int:
        uow = self.uow_factory()
        use_case = SweepExpiredSessionsUseCase(
            uow, SessionStore(uow, self.clock, self.session_ttl)
        )
        try:
            result = await use_case.execute()
        finally:
            await uow.session.close()
        if result.is_err():
            logger.warning(f"Session sweep failed: {result.error.code}")
            return 0
        return result.value.revoked_count

    async def _loop(self):
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.run_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Session sweep tick crashed, retrying next interval")

    def start(self):
        if self._task is None:
            logger.info(f"Starting session sweeper (every {self.interval_seconds}s)")
            self._task = asyncio.create_task(self._loop())

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("Session sweeper stopped with an error")
        self._task = None
