"""Unit tests for PKCE utilities."""

import re
from base64 import urlsafe_b64decode

from enroll.adapter.oauth.pkce import code_challenge, generate_pkce_pair


class TestGeneratePkcePair:
    """Tests for generate_pkce_pair function."""

    def test_verifier_is_43_base64url_characters(self):
        verifier, _ = generate_pkce_pair()

        assert re.match(r"^[A-Za-z0-9_-]{43}$", verifier)
        assert len(urlsafe_b64decode(verifier + "=")) == 32

    def test_challenge_is_s256_of_verifier(self):
        verifier, challenge = generate_pkce_pair()

        assert challenge == code_challenge(verifier)
        assert len(urlsafe_b64decode(challenge + "=")) == 32
        assert "=" not in challenge

    def test_known_challenge(self):
        """RFC 7636 appendix B example."""
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"

        assert code_challenge(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"

    def test_generates_unique_pairs(self):
        pairs = {generate_pkce_pair() for _ in range(50)}

        assert len(pairs) == 50
