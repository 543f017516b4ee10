"""
Refresh Token Use Case

Exchanges a refresh token for a new access token.
"""

import logging

from libs.result import Error, Result, Return
from src.app.errors import (
    ErrorCode,
    TokenErrorReason,
    invalid_token,
    store_unavailable_as_error,
)
from src.app.services.clock import IClock
from src.app.services.session_store import SessionStore
from src.app.services.token_codec import TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import TokenType
from .dtos import AuthResponse

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing access tokens.

    Business Rules:
    - Token must verify and be of type REFRESH
    - A non-revoked session must be bound to the token
    - An expired session is revoked (and committed) before SESSION_EXPIRED
    - The refresh token is NOT rotated: the same token is returned and stays
      valid until its session expires or is revoked
    - last_used_at is advanced on success
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_codec: TokenCodec,
        session_store: SessionStore,
        clock: IClock,
    ):
        self.uow = uow
        self.token_codec = token_codec
        self.session_store = session_store
        self.clock = clock

    @store_unavailable_as_error
    async def execute(self, refresh_token: str) -> Result[AuthResponse]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to exchange

        Returns:
            Result with AuthResponse holding a new access token and the same
            refresh token, or Error(INVALID_TOKEN / SESSION_REVOKED / SESSION_EXPIRED)
        """
        claims_result = self.token_codec.verify(refresh_token)
        if claims_result.is_err():
            return Return.err(claims_result.error)

        if claims_result.value.type != TokenType.refresh:
            return Return.err(
                invalid_token(TokenErrorReason.unsupported, "Token is not a refresh token")
            )

        async with self.uow:
            session = await self.session_store.find_active_by_refresh_token(refresh_token)
            if session is None:
                return Return.err(
                    Error(
                        ErrorCode.SESSION_REVOKED.value,
                        "Refresh token not found or session has been revoked",
                    )
                )

            now = self.clock.now()
            if session.expires_at <= now:
                await self.session_store.revoke(session.id)
                await self.uow.commit()
                logger.info(f"Session {session.id} expired on refresh and was revoked")
                return Return.err(
                    Error(ErrorCode.SESSION_EXPIRED.value, "Session has expired, please log in again")
                )

            user = await self.uow.users.get_by_id(session.user_id)
            if user is None:
                return Return.err(
                    Error(ErrorCode.SESSION_REVOKED.value, "Session owner no longer exists")
                )

            await self.session_store.touch_last_used(session.id, now)
            await self.uow.commit()

            access_token = self.token_codec.issue_access_token(user.id)

            return Return.ok(
                AuthResponse.for_user(
                    user,
                    access_token,
                    refresh_token,
                    self.token_codec.access_ttl_seconds,
                    session.id,
                )
            )
