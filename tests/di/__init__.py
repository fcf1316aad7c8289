"""Mock providers for testing."""

from .email import MockEmailProvider
from .oauth import MockOAuthClientProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockEmailProvider",
    "MockOAuthClientProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
