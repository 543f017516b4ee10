from datetime import timedelta

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.clock import SystemClock
from src.adapter.services.password_hasher import BcryptPasswordHasher
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.auth_orchestrator import AuthOrchestrator
from src.app.services.clock import IClock
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.token_codec import TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import Principal
from src.domain.entities import TokenType

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()

_system_clock = SystemClock()
_password_hasher = BcryptPasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_clock() -> IClock:
    return _system_clock


def get_password_hasher() -> IPasswordHasher:
    return _password_hasher


def get_token_codec(clock: IClock = Depends(get_clock)) -> TokenCodec:
    return TokenCodec(
        secret_key=ApplicationConfig.JWT_SECRET,
        clock=clock,
        access_ttl=timedelta(seconds=ApplicationConfig.ACCESS_TOKEN_TTL_SECONDS),
        refresh_ttl=timedelta(seconds=ApplicationConfig.REFRESH_TOKEN_TTL_SECONDS),
        algorithm=ApplicationConfig.JWT_ALGORITHM,
    )


def get_auth_orchestrator(
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
    clock: IClock = Depends(get_clock),
) -> AuthOrchestrator:
    return AuthOrchestrator(
        uow,
        token_codec,
        password_hasher,
        clock,
        session_ttl=timedelta(seconds=ApplicationConfig.SESSION_TTL_SECONDS),
    )


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    token_codec: TokenCodec = Depends(get_token_codec),
) -> Principal:
    """
    Dependency to verify the bearer access token and build the caller's Principal.

    Only signature and expiry are checked - no store lookup on this path.

    Raises:
        HTTPException: 401 if the token is invalid, expired or not an access token
    """
    result = token_codec.verify(credentials.credentials)

    if result.is_err() or result.value.type != TokenType.access:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return Principal(user_id=result.value.subject_id)
