"""OAuth infrastructure providers."""

from dishka import Scope, provide

from enroll.adapter.oauth import (
    AmazonOAuthClient,
    GoogleOAuthClient,
    InMemoryVerifierStore,
    VerifierStore,
)
from enroll.config import Settings
from enroll.domain.service import OAuthClient
from enroll.domain.value import OAuthProvider
from enroll.util.di.base import ProviderBase


class OAuthClientProvider(ProviderBase):
    """OAuth component base."""

    __mock_component__ = "oauth"


class ProdOAuthClientProvider(OAuthClientProvider):
    """Production OAuth provider with real Google and Amazon clients."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_verifier_store(self) -> VerifierStore:
        """Provide process-local PKCE verifier store."""
        return InMemoryVerifierStore()

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self, settings: Settings, verifier_store: VerifierStore
    ) -> dict[OAuthProvider, OAuthClient]:
        """Provide dictionary of all OAuth clients by provider.

        Returns:
            Dictionary mapping OAuthProvider to OAuthClient

        Raises:
            ConfigurationError: If any provider's credentials are not configured
        """
        oauth = settings.oauth
        return {
            OAuthProvider.GOOGLE: GoogleOAuthClient(
                client_id=oauth.google.client_id,
                client_secret=oauth.google.client_secret,
                redirect_uri=oauth.google.redirect_uri,
                verifier_store=verifier_store,
                timeout=oauth.timeout_seconds,
                state_ttl_seconds=oauth.state_ttl_seconds,
            ),
            OAuthProvider.AMAZON: AmazonOAuthClient(
                client_id=oauth.amazon.client_id,
                client_secret=oauth.amazon.client_secret,
                redirect_uri=oauth.amazon.redirect_uri,
                verifier_store=verifier_store,
                timeout=oauth.timeout_seconds,
                state_ttl_seconds=oauth.state_ttl_seconds,
            ),
        }
