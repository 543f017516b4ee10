"""
Login Use Case

Handles credential verification and opens a new session per login.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.errors import ErrorCode, store_unavailable_as_error
from src.app.services.clock import IClock
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.session_store import SessionStore
from src.app.services.token_codec import TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from .dtos import AuthResponse, LoginCommand

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown user, wrong password and inactive account all fail the same way
    - Each login creates a new session; other devices stay logged in
    - Updates user.last_login_at
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_codec: TokenCodec,
        session_store: SessionStore,
        password_hasher: IPasswordHasher,
        clock: IClock,
    ):
        self.uow = uow
        self.token_codec = token_codec
        self.session_store = session_store
        self.password_hasher = password_hasher
        self.clock = clock

    async def _find_user(self, command: LoginCommand) -> Optional[User]:
        if command.email:
            return await self.uow.users.get_by_email(command.email)
        if command.phone:
            return await self.uow.users.get_by_phone(command.phone)
        return None

    @store_unavailable_as_error
    async def execute(self, command: LoginCommand) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            command: LoginCommand with email (or phone), password, device data

        Returns:
            Result with AuthResponse, or Error(INVALID_CREDENTIALS)
        """
        invalid = Error(ErrorCode.INVALID_CREDENTIALS.value, "Invalid credentials")

        async with self.uow:
            user = await self._find_user(command)

            if user is None:
                # Spend the same time as a real check
                self.password_hasher.verify_dummy(command.password)
                logger.warning("Login failed: unknown identifier")
                return Return.err(invalid)

            if not self.password_hasher.verify(command.password, user.password_hash):
                logger.warning(f"Login failed: wrong password for user {user.id}")
                return Return.err(invalid)

            if not user.is_active:
                logger.warning(f"Login failed: user {user.id} is inactive")
                return Return.err(invalid)

            now = self.clock.now()
            user.last_login_at = now
            user.updated_at = now
            user = await self.uow.users.update(user)

            access_token = self.token_codec.issue_access_token(user.id)
            refresh_token = self.token_codec.issue_refresh_token(user.id)

            session_result = await self.session_store.create(
                user.id,
                refresh_token,
                device_info=command.device_info,
                device_type=command.device_type,
                ip_address=command.ip_address,
            )
            if session_result.is_err():
                return Return.err(session_result.error)

            active_sessions = await self.session_store.count_active(user.id, now)

            await self.uow.commit()
            logger.info(f"User {user.id} logged in ({active_sessions} active session(s))")

            return Return.ok(
                AuthResponse.for_user(
                    user,
                    access_token,
                    refresh_token,
                    self.token_codec.access_ttl_seconds,
                    session_result.value.id,
                )
            )
