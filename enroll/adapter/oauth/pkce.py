"""PKCE (Proof Key for Code Exchange) utilities for OAuth security."""

import secrets
from base64 import urlsafe_b64encode
from hashlib import sha256

VERIFIER_BYTES = 32


def code_challenge(verifier: str) -> str:
    """S256 code challenge: base64url(SHA-256(verifier)) without padding."""
    digest = sha256(verifier.encode("ascii")).digest()
    return urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def generate_pkce_pair() -> tuple[str, str]:
    """Generate PKCE verifier and challenge for OAuth authorization.

    The challenge is sent with the authorization request and the verifier
    with the token exchange, proving both came from the same client.

    Returns:
        Tuple of (verifier, challenge), both base64url encoded strings
        - verifier: 43 characters from 32 random bytes
        - challenge: SHA-256 hash of verifier
    """
    verifier_bytes = secrets.token_bytes(VERIFIER_BYTES)
    verifier = urlsafe_b64encode(verifier_bytes).rstrip(b"=").decode("ascii")
    return (verifier, code_challenge(verifier))
