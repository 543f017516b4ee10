from abc import ABC, abstractmethod

from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """
    Transaction boundary shared by the user directory and the session store.

    A use case opens it with ``async with``, calls ``commit()`` once its
    writes are complete, and leaves. Leaving discards anything not committed,
    so an early ``return`` on an error result never persists partial work
    (e.g. a user row without its session).
    """

    users: IUserRepository
    sessions: ISessionRepository

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        """Roll back whatever was not committed"""

    @abstractmethod
    async def commit(self):
        """Persist pending writes; raises StoreUnavailableError if the store fails"""

    @abstractmethod
    async def rollback(self):
        pass
