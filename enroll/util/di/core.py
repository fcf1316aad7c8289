"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from enroll.adapter.crypto import AeadCipher
from enroll.config import RegistrationSettings, Settings
from enroll.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_registration_settings(self, settings: Settings) -> RegistrationSettings:
        """Provide registration settings."""
        return settings.registration

    @provide(scope=Scope.APP)
    def provide_cipher(self, settings: Settings) -> AeadCipher:
        """Provide the OAuth token cipher.

        Raises:
            ConfigurationError: If ENCRYPTION__KEY is missing or not a 256-bit key
        """
        return AeadCipher(settings.encryption.key)
