"""
Auth Orchestrator

Single entry point for the credential lifecycle:
Anonymous -> Authenticated(access, refresh, session)
          -> Refreshed(new access) | LoggedOut | SessionExpired
"""

from datetime import timedelta
from typing import Optional

from libs.result import Result
from src.app.services.clock import IClock
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.session_store import SESSION_TTL, SessionStore
from src.app.services.token_codec import TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthResponse,
    LoginCommand,
    LoginUseCase,
    LogoutUseCase,
    Principal,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
)
from src.app.use_cases.sessions import (
    ActiveSessionsResponse,
    RevokeAllSessionsResponse,
    RevokeSessionsUseCase,
)
from src.domain.entities import DeviceType


class AuthOrchestrator:
    """Composes TokenCodec, SessionStore and the user directory per request"""

    def __init__(
        self,
        uow: UnitOfWork,
        token_codec: TokenCodec,
        password_hasher: IPasswordHasher,
        clock: IClock,
        session_ttl: timedelta = SESSION_TTL,
    ):
        self.uow = uow
        self.token_codec = token_codec
        self.password_hasher = password_hasher
        self.clock = clock
        self.session_store = SessionStore(uow, clock, session_ttl)

    async def register(self, command: RegisterCommand) -> Result[AuthResponse]:
        use_case = RegisterUseCase(
            self.uow, self.token_codec, self.session_store, self.password_hasher, self.clock
        )
        return await use_case.execute(command)

    async def login(self, command: LoginCommand) -> Result[AuthResponse]:
        use_case = LoginUseCase(
            self.uow, self.token_codec, self.session_store, self.password_hasher, self.clock
        )
        return await use_case.execute(command)

    async def refresh(self, refresh_token: str) -> Result[AuthResponse]:
        use_case = RefreshTokenUseCase(
            self.uow, self.token_codec, self.session_store, self.clock
        )
        return await use_case.execute(refresh_token)

    async def logout(self, refresh_token: str) -> Result[None]:
        return await LogoutUseCase(self.uow, self.session_store).execute(refresh_token)

    async def logout_all_devices(
        self, principal: Principal
    ) -> Result[RevokeAllSessionsResponse]:
        use_case = RevokeSessionsUseCase(self.uow, self.session_store)
        return await use_case.revoke_all_sessions(principal)

    async def list_sessions(
        self, principal: Principal, device_type: Optional[DeviceType] = None
    ) -> Result[ActiveSessionsResponse]:
        use_case = RevokeSessionsUseCase(self.uow, self.session_store)
        return await use_case.list_active_sessions(principal, device_type)

    async def revoke_session(self, principal: Principal, session_id: int) -> Result[None]:
        use_case = RevokeSessionsUseCase(self.uow, self.session_store)
        return await use_case.revoke_specific_session(principal, session_id)
