"""Unit tests for the key generation script."""

from base64 import b64decode

from enroll.adapter.crypto import AeadCipher
from enroll.adapter.crypto.keygen import main


def test_prints_usable_key(capsys):
    assert main() == 0

    key = capsys.readouterr().out.strip()

    assert len(b64decode(key)) == 32
    # Key is accepted by the cipher
    AeadCipher(key)
