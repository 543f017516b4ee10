from abc import ABC, abstractmethod
from datetime import datetime


class IClock(ABC):
    """Source of the current time. Always naive UTC."""

    @abstractmethod
    def now(self) -> datetime:
        pass
