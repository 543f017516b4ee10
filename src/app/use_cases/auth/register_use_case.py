"""
Register Use Case

Creates a user, issues the first token pair and opens its session.
"""

import logging

from libs.result import Error, Result, Return
from src.app.errors import DuplicateUserError, ErrorCode, store_unavailable_as_error
from src.app.services.clock import IClock
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.session_store import SessionStore
from src.app.services.token_codec import TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import DEFAULT_ROLE, User
from .dtos import AuthResponse, RegisterCommand

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Reject a taken email (DUPLICATE_EMAIL) or phone (DUPLICATE_PHONE)
    2. Hash the password and create the user with the default role
    3. Issue one access + one refresh token
    4. Create the session bound to the refresh token
    5. Commit user and session atomically
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

    @store_unavailable_as_error
    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with validated email, password, device data

        Returns:
            Result[AuthResponse] with tokens and profile,
            or Error(DUPLICATE_EMAIL / DUPLICATE_PHONE / SESSION_CONFLICT)
        """
        async with self.uow:
            if await self.uow.users.exists_by_email(command.email):
                return Return.err(
                    Error(ErrorCode.DUPLICATE_EMAIL.value, "Email is already in use")
                )

            if command.phone and await self.uow.users.exists_by_phone(command.phone):
                return Return.err(
                    Error(ErrorCode.DUPLICATE_PHONE.value, "Phone number is already in use")
                )

            now = self.clock.now()
            user = User(
                email=command.email,
                phone=command.phone,
                password_hash=self.password_hasher.hash(command.password),
                is_active=True,
                roles=[DEFAULT_ROLE.value],
                created_at=now,
                updated_at=now,
            )
            try:
                user = await self.uow.users.create(user)
            except DuplicateUserError as exc:
                # Lost a race with a concurrent registration
                if exc.field == "phone":
                    return Return.err(
                        Error(ErrorCode.DUPLICATE_PHONE.value, "Phone number is already in use")
                    )
                return Return.err(
                    Error(ErrorCode.DUPLICATE_EMAIL.value, "Email is already in use")
                )

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

            await self.uow.commit()
            logger.info(f"Registered user {user.id}")

            return Return.ok(
                AuthResponse.for_user(
                    user,
                    access_token,
                    refresh_token,
                    self.token_codec.access_ttl_seconds,
                    session_result.value.id,
                )
            )
