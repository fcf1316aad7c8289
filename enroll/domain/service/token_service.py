"""Verification token service."""

import hashlib
import secrets
from datetime import datetime, timedelta, timezone

from enroll.domain.error import InvalidInputError

from .base import Service

TOKEN_BYTES = 32
DEFAULT_WINDOW = timedelta(hours=24)


class TokenCodec(Service):
    """Generates, hashes and ages verification tokens.

    The plaintext token only ever leaves in the verification email; the
    store keeps its SHA-256 digest.
    """

    def __init__(self, window: timedelta = DEFAULT_WINDOW) -> None:
        """Initialize token codec.

        Args:
            window: How long a token stays valid after issuance
        """
        self.window = window

    def generate(self) -> str:
        """Generate a URL-safe token with 256 bits of entropy, no padding."""
        return secrets.token_urlsafe(TOKEN_BYTES)

    def hash(self, token: str) -> str:
        """SHA-256 hex digest of the token.

        Raises:
            InvalidInputError: If token is empty
        """
        if not token:
            raise InvalidInputError("Token cannot be null or empty")
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    def is_expired(self, issued_at: datetime, now: datetime | None = None) -> bool:
        """Whether the validity window starting at issued_at has passed."""
        now = now or datetime.now(timezone.utc)
        if issued_at.tzinfo is None:
            issued_at = issued_at.replace(tzinfo=timezone.utc)
        return now > issued_at + self.window
