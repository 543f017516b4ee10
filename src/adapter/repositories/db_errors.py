import functools

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from src.app.errors import StoreUnavailableError


def translate_db_errors(func):
    """
    Re-raise driver and pool failures as StoreUnavailableError.

    IntegrityError passes through untouched; repositories map it to their
    own conflict errors.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except IntegrityError:
            raise
        except (DBAPIError, PoolTimeoutError) as exc:
            raise StoreUnavailableError(str(exc)) from exc

    return wrapper
