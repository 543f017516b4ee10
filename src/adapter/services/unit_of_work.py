from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.db_errors import translate_db_errors
from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """UnitOfWork over one AsyncSession; users and sessions share its transaction"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.users = UserRepository(session)
        self.sessions = SessionRepository(session)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        # No-op after a commit; discards partial writes otherwise
        await self.rollback()

    @translate_db_errors
    async def commit(self):
        await self.session.commit()

    @translate_db_errors
    async def rollback(self):
        await self.session.rollback()
