"""
Unit tests for Register Use Case
"""

import pytest

from src.app.errors import DuplicateUserError, SessionConflictError
from src.app.use_cases.auth import RegisterCommand, RegisterUseCase
from src.domain.entities import DeviceType, TokenType


@pytest.fixture
def use_case(mock_uow, token_codec, session_store, password_hasher, clock):
    return RegisterUseCase(mock_uow, token_codec, session_store, password_hasher, clock)


@pytest.mark.asyncio
async def test_successful_register(use_case, mock_uow, token_codec, password_hasher):
    command = RegisterCommand(
        email="a@x.com", password="p", device_info="Chrome", device_type=DeviceType.web
    )

    result = await use_case.execute(command)

    assert result.is_ok()
    data = result.value
    assert data.access_token
    assert data.refresh_token
    assert data.token_type == "Bearer"
    assert data.expires_in == 900
    assert data.user_id == 1
    assert data.email == "a@x.com"
    assert "CUSTOMER" in data.roles
    assert data.session_id == 10

    assert token_codec.verify(data.access_token).value.type == TokenType.access
    assert token_codec.verify(data.refresh_token).value.type == TokenType.refresh

    # One user row, one session row bound to the issued refresh token
    mock_uow.users.create.assert_called_once()
    created_user = mock_uow.users.create.call_args.args[0]
    assert password_hasher.verify("p", created_user.password_hash)
    assert created_user.roles == ["CUSTOMER"]

    mock_uow.sessions.create.assert_called_once()
    created_session = mock_uow.sessions.create.call_args.args[0]
    assert created_session.refresh_token == data.refresh_token
    assert created_session.user_id == 1
    assert created_session.device_type == DeviceType.web

    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_register_duplicate_email(use_case, mock_uow):
    mock_uow.users.exists_by_email.return_value = True

    result = await use_case.execute(RegisterCommand(email="a@x.com", password="p"))

    assert result.is_err()
    assert result.error.code == "DUPLICATE_EMAIL"
    mock_uow.users.create.assert_not_called()
    mock_uow.sessions.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_register_duplicate_phone(use_case, mock_uow):
    mock_uow.users.exists_by_phone.return_value = True

    result = await use_case.execute(
        RegisterCommand(email="a@x.com", password="p", phone="+15550100")
    )

    assert result.is_err()
    assert result.error.code == "DUPLICATE_PHONE"
    mock_uow.users.exists_by_phone.assert_called_once_with("+15550100")
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_register_without_phone_skips_phone_check(use_case, mock_uow):
    result = await use_case.execute(RegisterCommand(email="a@x.com", password="p"))

    assert result.is_ok()
    mock_uow.users.exists_by_phone.assert_not_called()


@pytest.mark.asyncio
async def test_register_lost_race_on_phone(use_case, mock_uow):
    mock_uow.users.create.side_effect = DuplicateUserError("phone")

    result = await use_case.execute(
        RegisterCommand(email="a@x.com", password="p", phone="+15550100")
    )

    assert result.is_err()
    assert result.error.code == "DUPLICATE_PHONE"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_register_session_conflict_rolls_back(use_case, mock_uow):
    mock_uow.sessions.create.side_effect = SessionConflictError("dup")

    result = await use_case.execute(RegisterCommand(email="a@x.com", password="p"))

    assert result.is_err()
    assert result.error.code == "SESSION_CONFLICT"
    mock_uow.commit.assert_not_called()
    mock_uow.__aexit__.assert_called_once()
