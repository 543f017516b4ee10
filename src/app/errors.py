"""
Error taxonomy for the auth core.

Business failures travel as ``libs.result.Error`` values whose ``code`` is an
``ErrorCode``. Infrastructure failures are raised by the repository adapters
as the exceptions below and turned into ``STORE_UNAVAILABLE`` results at the
use-case boundary.
"""

import functools
import logging
from enum import Enum

from libs.result import Error, Return

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    INVALID_TOKEN = "INVALID_TOKEN"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    DUPLICATE_PHONE = "DUPLICATE_PHONE"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    SESSION_REVOKED = "SESSION_REVOKED"
    SESSION_EXPIRED = "SESSION_EXPIRED"
    SESSION_CONFLICT = "SESSION_CONFLICT"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


class TokenErrorReason(str, Enum):
    """Why a token failed verification"""

    malformed = "malformed"
    bad_signature = "bad-signature"
    expired = "expired"
    unsupported = "unsupported"


class StoreUnavailableError(Exception):
    """The backing store could not be reached or failed mid-operation"""


class SessionConflictError(Exception):
    """A session with the same refresh token already exists"""


class DuplicateUserError(Exception):
    """A user with the same email or phone already exists"""

    def __init__(self, field: str = "email"):
        self.field = field
        super().__init__(f"Duplicate user {field}")


def invalid_token(reason: TokenErrorReason, message: str) -> Error:
    return Error(ErrorCode.INVALID_TOKEN.value, message, reason=reason.value)


def store_unavailable_as_error(func):
    """Turn a StoreUnavailableError escaping a use case into a Result error."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except StoreUnavailableError as exc:
            logger.error(f"Store unavailable in {func.__qualname__}: {exc}")
            return Return.err(
                Error(ErrorCode.STORE_UNAVAILABLE.value, "Session store is unavailable")
            )

    return wrapper
