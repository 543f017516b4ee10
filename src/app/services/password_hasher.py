from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """Password hashing capability used by the user directory flows"""

    @abstractmethod
    def hash(self, plain_password: str) -> str:
        pass

    @abstractmethod
    def verify(self, plain_password: str, password_hash: str) -> bool:
        """Constant-time check; returns False on any malformed hash"""
        pass

    @abstractmethod
    def verify_dummy(self, plain_password: str) -> None:
        """Spend the same time as verify() when there is no hash to check"""
        pass
