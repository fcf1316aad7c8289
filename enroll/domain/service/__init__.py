"""Domain services."""

from .base import Service
from .identity_service import IdentityService
from .notification_service import EmailNotifier, verification_link
from .oauth_service import OAuthClient, PkceExchange
from .password_service import PasswordHasher
from .token_service import TokenCodec
from .validation_service import ValidationService

__all__ = [
    "EmailNotifier",
    "IdentityService",
    "OAuthClient",
    "PasswordHasher",
    "PkceExchange",
    "Service",
    "TokenCodec",
    "ValidationService",
    "verification_link",
]
