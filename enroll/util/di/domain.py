"""Domain layer DI providers."""

from datetime import timedelta

from dishka import Scope, provide

from enroll.config import RegistrationSettings
from enroll.domain.repository import IdentityRepository
from enroll.domain.service import (
    IdentityService,
    OAuthClient,
    PasswordHasher,
    PkceExchange,
    TokenCodec,
    ValidationService,
)
from enroll.domain.value import OAuthProvider
from enroll.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services that touch a repository are REQUEST-scoped to align with the
    repository/session lifecycle. Stateless primitives are APP-scoped.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_password_hasher(self, settings: RegistrationSettings) -> PasswordHasher:
        """Provide bcrypt password hasher."""
        return PasswordHasher(rounds=settings.bcrypt_rounds)

    @provide(scope=Scope.APP)
    def get_token_codec(self, settings: RegistrationSettings) -> TokenCodec:
        """Provide verification token codec."""
        return TokenCodec(window=timedelta(hours=settings.verification_window_hours))

    @provide(scope=Scope.APP)
    def get_pkce_exchange(
        self, oauth_clients: dict[OAuthProvider, OAuthClient]
    ) -> PkceExchange:
        """Provide PKCE exchange routing to every configured provider.

        Args:
            oauth_clients: Dictionary mapping providers to their OAuth clients
        """
        return PkceExchange(oauth_clients=oauth_clients)

    @provide
    def get_validation_service(
        self, identity_repository: IdentityRepository
    ) -> ValidationService:
        """Provide registration validation service."""
        return ValidationService(identity_repository=identity_repository)

    @provide
    def get_identity_service(
        self, identity_repository: IdentityRepository
    ) -> IdentityService:
        """Provide identity record domain service."""
        return IdentityService(identity_repository=identity_repository)
