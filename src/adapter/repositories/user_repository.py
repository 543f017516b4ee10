from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.db_errors import translate_db_errors
from src.app.errors import DuplicateUserError
from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_db_errors
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_db_errors
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_db_errors
    async def get_by_phone(self, phone: str) -> Optional[User]:
        """Get user by phone number"""
        stmt = select(User).where(User.phone == phone)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_db_errors
    async def exists_by_email(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email).limit(1)
        result = await self.session.exec(stmt)
        return result.first() is not None

    @translate_db_errors
    async def exists_by_phone(self, phone: str) -> bool:
        stmt = select(User.id).where(User.phone == phone).limit(1)
        result = await self.session.exec(stmt)
        return result.first() is not None

    @translate_db_errors
    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            field = "phone" if "phone" in str(exc.orig) else "email"
            raise DuplicateUserError(field) from exc
        await self.session.refresh(user)
        return user

    @translate_db_errors
    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
