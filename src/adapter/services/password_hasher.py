import bcrypt

from src.app.services.password_hasher import IPasswordHasher

# bcrypt only reads the first 72 bytes; newer releases raise instead of truncating
BCRYPT_MAX_BYTES = 72


def _encode(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt with a configurable cost factor (12 in production)"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash = bcrypt.hashpw(b"dummy-password", bcrypt.gensalt(rounds))

    def hash(self, plain_password: str) -> str:
        return bcrypt.hashpw(_encode(plain_password), bcrypt.gensalt(self.rounds)).decode("utf-8")

    def verify(self, plain_password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(plain_password), password_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            return False

    def verify_dummy(self, plain_password: str) -> None:
        bcrypt.checkpw(_encode(plain_password), self._dummy_hash)
