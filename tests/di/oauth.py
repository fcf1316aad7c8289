"""Mock OAuth providers for testing."""

from dishka import Scope, provide

from enroll.adapter.oauth import MockOAuthClient
from enroll.domain.service import OAuthClient
from enroll.domain.value import OAuthProvider
from enroll.util.di.infrastructure.oauth import OAuthClientProvider


class MockOAuthClientProvider(OAuthClientProvider):
    """Mock OAuth provider using mock clients for every provider."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_oauth_clients(self) -> dict[OAuthProvider, OAuthClient]:
        """Provide mock OAuth clients."""
        return {provider: MockOAuthClient(provider) for provider in OAuthProvider}
