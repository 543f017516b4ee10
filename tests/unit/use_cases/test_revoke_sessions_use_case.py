"""
Unit tests for RevokeSessionsUseCase
"""

from datetime import timedelta

import pytest

from src.app.use_cases.auth import Principal
from src.app.use_cases.sessions import RevokeSessionsUseCase
from src.domain.entities import DeviceType, Session


@pytest.fixture
def use_case(mock_uow, session_store):
    return RevokeSessionsUseCase(mock_uow, session_store)


@pytest.fixture
def principal():
    return Principal(user_id=1)


def make_session(clock, session_id, user_id=1, **overrides):
    values = dict(
        id=session_id,
        user_id=user_id,
        refresh_token=f"rt-{session_id}",
        revoked=False,
        created_at=clock.now(),
        last_used_at=clock.now(),
        expires_at=clock.now() + timedelta(days=7),
    )
    values.update(overrides)
    return Session(**values)


@pytest.mark.asyncio
async def test_revoke_all_sessions(use_case, mock_uow, principal, clock):
    mock_uow.sessions.revoke_all_by_user_id.return_value = 3

    result = await use_case.revoke_all_sessions(principal)

    assert result.is_ok()
    assert result.value.user_id == 1
    assert result.value.revoked_count == 3
    mock_uow.sessions.revoke_all_by_user_id.assert_called_once_with(1, clock.now())
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_revoke_all_with_no_sessions(use_case, mock_uow, principal):
    result = await use_case.revoke_all_sessions(principal)

    assert result.is_ok()
    assert result.value.revoked_count == 0


@pytest.mark.asyncio
async def test_revoke_specific_session(use_case, mock_uow, principal, clock):
    mock_uow.sessions.get_by_id.return_value = make_session(clock, 10)

    result = await use_case.revoke_specific_session(principal, 10)

    assert result.is_ok()
    mock_uow.sessions.revoke_by_id.assert_called_once_with(10, clock.now())
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_revoke_specific_session_not_found(use_case, mock_uow, principal):
    result = await use_case.revoke_specific_session(principal, 99)

    assert result.is_err()
    assert result.error.code == "SESSION_NOT_FOUND"
    mock_uow.sessions.revoke_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_revoke_other_users_session_forbidden(use_case, mock_uow, principal, clock):
    mock_uow.sessions.get_by_id.return_value = make_session(clock, 20, user_id=2)

    result = await use_case.revoke_specific_session(principal, 20)

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    mock_uow.sessions.revoke_by_id.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_list_active_sessions(use_case, mock_uow, principal, clock):
    mock_uow.sessions.get_active_by_user_id.return_value = [
        make_session(clock, 11, device_type=DeviceType.ios, device_info="iPhone"),
        make_session(clock, 10, device_type=DeviceType.web),
    ]

    result = await use_case.list_active_sessions(principal)

    assert result.is_ok()
    assert result.value.active_count == 2
    assert [s.id for s in result.value.sessions] == [11, 10]
    assert result.value.sessions[0].device_info == "iPhone"
    mock_uow.sessions.get_active_by_user_id.assert_called_once_with(1, clock.now(), None)
