"""Password hashing service."""

import bcrypt

from enroll.domain.error import InvalidInputError

from .base import Service

DEFAULT_ROUNDS = 12
# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class PasswordHasher(Service):
    """Hashes registration passwords with bcrypt.

    Each hash gets a fresh salt from bcrypt, so two hashes of one password
    differ but both verify.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Raises:
            InvalidInputError: If password is empty or exceeds the bcrypt input limit
        """
        if not password:
            raise InvalidInputError("Password cannot be null or empty")

        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_BYTES:
            raise InvalidInputError(
                f"Password cannot exceed {BCRYPT_MAX_BYTES} bytes"
            )
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash. Malformed input is a mismatch."""
        if not password or not password_hash:
            return False

        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
        except ValueError:
            return False
