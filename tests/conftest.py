"""Test configuration and fixtures."""

import os
from datetime import datetime, timezone

from enroll.adapter.crypto import AeadCipher

# Test defaults, applied before any Settings() is built
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("ENCRYPTION__KEY", AeadCipher.generate_key())
os.environ.setdefault("REGISTRATION__BCRYPT_ROUNDS", "4")
os.environ.setdefault("REGISTRATION__BASE_URL", "https://accounts.example.com")

VALID_PASSWORD = "Abc12345!"


def utc(*args: int) -> datetime:
    """Timezone-aware UTC datetime helper."""
    return datetime(*args, tzinfo=timezone.utc)
