import pytest

from src.app.use_cases.auth import LoginCommand, LoginUseCase
from src.domain.entities import User


@pytest.fixture
def use_case(mock_uow, token_codec, session_store, password_hasher, clock):
    return LoginUseCase(mock_uow, token_codec, session_store, password_hasher, clock)


@pytest.fixture
def existing_user(password_hasher):
    return User(
        id=5,
        email="user@acme.com",
        phone="+15550100",
        password_hash=password_hasher.hash("SecurePass123!"),
        is_active=True,
        roles=["CUSTOMER"],
    )


@pytest.mark.asyncio
async def test_successful_login(use_case, mock_uow, existing_user, clock):
    """Test successful login flow"""
    mock_uow.users.get_by_email.return_value = existing_user

    result = await use_case.execute(
        LoginCommand(email="user@acme.com", password="SecurePass123!", device_info="iPhone")
    )

    assert result.is_ok()
    data = result.value
    assert data.user_id == 5
    assert data.email == "user@acme.com"
    assert data.roles == ["CUSTOMER"]
    assert data.expires_in == 900
    assert data.session_id == 10

    # Verify UnitOfWork calls
    mock_uow.users.get_by_email.assert_called_once_with("user@acme.com")
    mock_uow.users.update.assert_called_once()
    assert existing_user.last_login_at == clock.now()
    mock_uow.sessions.create.assert_called_once()
    assert mock_uow.sessions.create.call_args.args[0].refresh_token == data.refresh_token
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_login_by_phone(use_case, mock_uow, existing_user):
    mock_uow.users.get_by_phone.return_value = existing_user

    result = await use_case.execute(LoginCommand(phone="+15550100", password="SecurePass123!"))

    assert result.is_ok()
    mock_uow.users.get_by_email.assert_not_called()
    mock_uow.users.get_by_phone.assert_called_once_with("+15550100")


@pytest.mark.asyncio
async def test_login_wrong_password(use_case, mock_uow, existing_user):
    """Wrong password fails and creates no session"""
    mock_uow.users.get_by_email.return_value = existing_user

    result = await use_case.execute(
        LoginCommand(email="user@acme.com", password="WrongPassword!")
    )

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.sessions.create.assert_not_called()
    mock_uow.users.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_login_nonexistent_user(use_case, mock_uow):
    mock_uow.users.get_by_email.return_value = None

    result = await use_case.execute(
        LoginCommand(email="nobody@acme.com", password="SomePassword!")
    )

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.sessions.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_login_inactive_user(use_case, mock_uow, existing_user):
    existing_user.is_active = False
    mock_uow.users.get_by_email.return_value = existing_user

    result = await use_case.execute(
        LoginCommand(email="user@acme.com", password="SecurePass123!")
    )

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.sessions.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_each_login_creates_new_session(use_case, mock_uow, existing_user):
    mock_uow.users.get_by_email.return_value = existing_user
    command = LoginCommand(email="user@acme.com", password="SecurePass123!")

    first = await use_case.execute(command)
    second = await use_case.execute(command)

    assert first.is_ok() and second.is_ok()
    assert first.value.refresh_token != second.value.refresh_token
    assert mock_uow.sessions.create.call_count == 2
    mock_uow.sessions.revoke_all_by_user_id.assert_not_called()
