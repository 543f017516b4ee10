from datetime import UTC, datetime

from src.app.services.clock import IClock


class SystemClock(IClock):
    """Wall clock, naive UTC to match the DateTime columns"""

    def now(self) -> datetime:
        return datetime.now(UTC).replace(tzinfo=None)
