"""Encryption adapter."""

from .aead import AeadCipher

__all__ = ["AeadCipher"]
