"""AES-256-GCM encryption for OAuth access tokens at rest."""

import binascii
import os
from base64 import b64decode, b64encode

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from enroll.domain.error import DecryptionFailure, InvalidInputError
from enroll.util.error import ConfigurationError

KEY_BYTES = 32  # AES-256
NONCE_BYTES = 12  # 96-bit nonce recommended for GCM
TAG_BYTES = 16  # 128-bit authentication tag


class AeadCipher:
    """Authenticated symmetric encryption.

    Ciphertext blobs are base64(nonce || ciphertext || tag). A fresh random
    nonce is drawn for every call to `encrypt`.
    """

    def __init__(self, base64_key: str) -> None:
        """Initialize cipher.

        Args:
            base64_key: Base64-encoded 256-bit key

        Raises:
            ConfigurationError: If the key is not base64 or not 32 bytes
        """
        if not base64_key:
            raise ConfigurationError("Encryption key must be configured")
        try:
            key = b64decode(base64_key, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ConfigurationError("Encryption key is not valid base64") from e

        if len(key) != KEY_BYTES:
            raise ConfigurationError(
                f"Encryption key must be {KEY_BYTES} bytes (256 bits) for AES-256. "
                f"Provided: {len(key)} bytes"
            )
        self._aesgcm = AESGCM(key)

    def encrypt(self, plaintext: str) -> str:
        """Encrypt text.

        Raises:
            InvalidInputError: If plaintext is empty
        """
        if not plaintext:
            raise InvalidInputError("Token cannot be null or empty")
        nonce = os.urandom(NONCE_BYTES)
        ciphertext = self._aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
        return b64encode(nonce + ciphertext).decode("ascii")

    def decrypt(self, blob: str) -> str:
        """Decrypt a blob produced by `encrypt`.

        Raises:
            InvalidInputError: If blob is empty
            DecryptionFailure: If the blob is malformed or fails authentication
        """
        if not blob:
            raise InvalidInputError("Encrypted token cannot be null or empty")
        try:
            raw = b64decode(blob, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecryptionFailure("Encrypted token is not valid base64") from e

        if len(raw) < NONCE_BYTES + TAG_BYTES:
            raise DecryptionFailure("Encrypted token is too short")

        nonce, ciphertext = raw[:NONCE_BYTES], raw[NONCE_BYTES:]
        try:
            plaintext = self._aesgcm.decrypt(nonce, ciphertext, None)
        except InvalidTag as e:
            raise DecryptionFailure(
                "Decryption failed: authentication tag mismatch "
                "(wrong key or tampered data)"
            ) from e
        return plaintext.decode("utf-8")

    @staticmethod
    def generate_key() -> str:
        """Fresh base64-encoded 256-bit key for provisioning."""
        return b64encode(AESGCM.generate_key(bit_length=KEY_BYTES * 8)).decode("ascii")
