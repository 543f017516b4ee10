import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import Session, User
from tests.utils.api import register


@pytest.mark.asyncio
async def test_register_creates_user_and_session(client: AsyncClient, db_session, clock):
    """Register returns a token pair bound to one new session"""
    response = await client.post(
        "/auth/register",
        json={
            "email": "a@x.com",
            "password": "SecurePass123!",
            "phone": "+15550100",
            "device_info": "Chrome on macOS",
            "device_type": "WEB",
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["access_token"]
    assert data["refresh_token"]
    assert data["token_type"] == "Bearer"
    assert data["expires_in"] == 900
    assert data["email"] == "a@x.com"
    assert data["phone"] == "+15550100"
    assert data["roles"] == ["CUSTOMER"]

    user = (await db_session.exec(select(User).where(User.email == "a@x.com"))).one()
    assert user.password_hash != "SecurePass123!"

    sessions = (
        await db_session.exec(
            select(Session)
            .where(Session.user_id == user.id)
            .execution_options(populate_existing=True)
        )
    ).all()
    assert len(sessions) == 1
    session = sessions[0]
    assert session.id == data["session_id"]
    assert session.refresh_token == data["refresh_token"]
    assert session.revoked is False
    assert session.device_type == "WEB"
    assert session.device_info == "Chrome on macOS"
    assert session.created_at == clock.now()


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, db_session):
    await register(client, "a@x.com")

    response = await client.post(
        "/auth/register", json={"email": "a@x.com", "password": "OtherPass123!"}
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_EMAIL"

    users = (await db_session.exec(select(User))).all()
    assert len(users) == 1


@pytest.mark.asyncio
async def test_register_duplicate_phone(client: AsyncClient):
    await register(client, "a@x.com", phone="+15550100")

    response = await client.post(
        "/auth/register",
        json={"email": "b@x.com", "password": "SecurePass123!", "phone": "+15550100"},
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_PHONE"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"email": "not-an-email", "password": "SecurePass123!"},
        {"email": "a@x.com", "password": "short"},
        {"email": "a@x.com", "password": "SecurePass123!", "device_type": "TOASTER"},
    ],
)
async def test_register_invalid_payload(client: AsyncClient, payload):
    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 422
