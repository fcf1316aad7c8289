"""OAuth 2.0 + PKCE adapter."""

from .client import (
    AmazonOAuthClient,
    GoogleOAuthClient,
    MockOAuthClient,
    PkceOAuthClient,
)
from .pkce import generate_pkce_pair
from .verifier_store import InMemoryVerifierStore, VerifierStore

__all__ = [
    "AmazonOAuthClient",
    "GoogleOAuthClient",
    "InMemoryVerifierStore",
    "MockOAuthClient",
    "PkceOAuthClient",
    "VerifierStore",
    "generate_pkce_pair",
]
