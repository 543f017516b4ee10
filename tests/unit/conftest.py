from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.adapter.services.password_hasher import BcryptPasswordHasher
from src.app.services.session_store import SessionStore
from src.app.services.token_codec import TokenCodec
from tests.utils.clock import FrozenClock
from tests.utils.tokens import TEST_SECRET


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def token_codec(clock):
    return TokenCodec(TEST_SECRET, clock)


@pytest.fixture
def password_hasher():
    # Low cost factor keeps the suite fast
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with user and session repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    async def create_user(user):
        user.id = 1
        return user

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_phone = AsyncMock(return_value=None)
    uow.users.exists_by_email = AsyncMock(return_value=False)
    uow.users.exists_by_phone = AsyncMock(return_value=False)
    uow.users.create = AsyncMock(side_effect=create_user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    async def create_session(session):
        session.id = 10
        return session

    uow.sessions = MagicMock()
    uow.sessions.get_by_id = AsyncMock(return_value=None)
    uow.sessions.create = AsyncMock(side_effect=create_session)
    uow.sessions.find_active_by_refresh_token = AsyncMock(return_value=None)
    uow.sessions.get_active_by_user_id = AsyncMock(return_value=[])
    uow.sessions.count_active_by_user_id = AsyncMock(return_value=1)
    uow.sessions.revoke_by_id = AsyncMock(return_value=True)
    uow.sessions.revoke_all_by_user_id = AsyncMock(return_value=0)
    uow.sessions.revoke_expired = AsyncMock(return_value=0)
    uow.sessions.touch_last_used = AsyncMock(return_value=True)
    return uow


@pytest.fixture
def session_store(mock_uow, clock):
    return SessionStore(mock_uow, clock, session_ttl=timedelta(days=7))
