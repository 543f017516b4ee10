"""
Token Codec

Issues and verifies signed, self-contained access and refresh tokens (JWT).
Verification needs only the secret and the clock, never a store lookup.
"""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import jws, jwt
from jose.exceptions import JWSError, JWTError
from pydantic import BaseModel

from libs.result import Result, Return
from src.app.errors import TokenErrorReason, invalid_token
from src.app.services.clock import IClock
from src.domain.entities import TokenType

ACCESS_TOKEN_TTL = timedelta(minutes=15)
REFRESH_TOKEN_TTL = timedelta(days=7)


class TokenClaims(BaseModel):
    """Verified content of a token"""

    subject_id: int
    type: TokenType
    token_id: Optional[str] = None
    issued_at: Optional[datetime] = None
    expires_at: datetime


def _to_timestamp(moment: datetime) -> int:
    # Clock values are naive UTC
    return int(moment.replace(tzinfo=UTC).timestamp())


def _from_timestamp(value: int) -> datetime:
    return datetime.fromtimestamp(value, UTC).replace(tzinfo=None)


class TokenCodec:
    """
    Creates and verifies HS256 tokens carrying subject id, type, iat and exp.

    Business Rules:
    - Signature must match the configured secret
    - exp must be strictly in the future at verification time
    - Verification never fails for business reasons (e.g. unknown subject)
    - Tokens carry no revocation state; refresh tokens are revoked via sessions
    """

    def __init__(
        self,
        secret_key: str,
        clock: IClock,
        access_ttl: timedelta = ACCESS_TOKEN_TTL,
        refresh_ttl: timedelta = REFRESH_TOKEN_TTL,
        algorithm: str = "HS256",
    ):
        if not secret_key:
            raise ValueError("Token signing key must not be empty")
        self._secret_key = secret_key
        self._clock = clock
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.algorithm = algorithm

    @property
    def access_ttl_seconds(self) -> int:
        return int(self.access_ttl.total_seconds())

    def issue_access_token(self, subject_id: int) -> str:
        return self._issue(subject_id, TokenType.access, self.access_ttl)

    def issue_refresh_token(self, subject_id: int) -> str:
        return self._issue(subject_id, TokenType.refresh, self.refresh_ttl)

    def _issue(self, subject_id: int, token_type: TokenType, ttl: timedelta) -> str:
        now = self._clock.now()
        payload = {
            "sub": str(subject_id),
            "type": token_type.value,
            "jti": uuid.uuid4().hex,
            "iat": _to_timestamp(now),
            "exp": _to_timestamp(now + ttl),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Result[TokenClaims]:
        """
        Verify a token and decode its claims.

        Args:
            token: Encoded token string

        Returns:
            Result with TokenClaims, or Error(INVALID_TOKEN) whose reason is
            malformed, bad-signature, expired or unsupported
        """
        if not isinstance(token, str) or not token:
            return Return.err(invalid_token(TokenErrorReason.malformed, "Token is empty"))

        try:
            header = jwt.get_unverified_header(token)
            claims = jwt.get_unverified_claims(token)
        except JWTError:
            return Return.err(
                invalid_token(TokenErrorReason.malformed, "Token could not be decoded")
            )

        if header.get("alg") != self.algorithm:
            return Return.err(
                invalid_token(TokenErrorReason.unsupported, "Token algorithm is not supported")
            )

        try:
            jws.verify(token, self._secret_key, algorithms=[self.algorithm])
        except JWSError:
            return Return.err(
                invalid_token(TokenErrorReason.bad_signature, "Token signature is invalid")
            )

        try:
            subject_id = int(claims["sub"])
            expires_at = _from_timestamp(int(claims["exp"]))
            issued_at = _from_timestamp(int(claims["iat"])) if "iat" in claims else None
        except (KeyError, TypeError, ValueError, OverflowError, OSError):
            return Return.err(
                invalid_token(TokenErrorReason.malformed, "Token claims are incomplete")
            )

        try:
            token_type = TokenType(claims.get("type"))
        except ValueError:
            return Return.err(
                invalid_token(TokenErrorReason.unsupported, "Token type is not supported")
            )

        if expires_at <= self._clock.now():
            return Return.err(invalid_token(TokenErrorReason.expired, "Token has expired"))

        return Return.ok(
            TokenClaims(
                subject_id=subject_id,
                type=token_type,
                token_id=claims.get("jti"),
                issued_at=issued_at,
                expires_at=expires_at,
            )
        )

    def type_of(self, token: str) -> Result[TokenType]:
        result = self.verify(token)
        if result.is_err():
            return Return.err(result.error)
        return Return.ok(result.value.type)

    def is_expired(self, token: str) -> bool:
        """
        Lossy check kept for compatibility: any verification failure counts
        as expired. Use verify() to get the actual reason.
        """
        return self.verify(token).is_err()
