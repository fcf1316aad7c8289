"""OAuth authorization-code + PKCE domain service."""

import logfire

from enroll.domain.error import InvalidInputError
from enroll.domain.value import AuthorizationRequest, OAuthProvider, ProviderProfile

from .base import Service


class OAuthClient:
    """Generic OAuth 2.0 + PKCE client interface, one per provider."""

    provider: OAuthProvider

    async def begin_authorization(self, state: str) -> AuthorizationRequest:
        """Create a PKCE pair, remember the verifier under state and build the URL.

        Args:
            state: Caller-supplied state parameter for CSRF protection

        Returns:
            Authorization URL to redirect the user to, with the state
        """
        raise NotImplementedError

    async def exchange_code(self, code: str, state: str) -> str:
        """Redeem the state's verifier and trade the code for an access token.

        Args:
            code: Authorization code from the provider callback
            state: State parameter from the provider callback

        Returns:
            Provider access token
        """
        raise NotImplementedError

    async def fetch_user_info(self, access_token: str) -> ProviderProfile:
        """Fetch the user's profile in the common shape.

        Args:
            access_token: Provider access token

        Returns:
            Normalized provider profile
        """
        raise NotImplementedError


class PkceExchange(Service):
    """Routes OAuth operations to the client registered for each provider."""

    def __init__(self, oauth_clients: dict[OAuthProvider, OAuthClient]) -> None:
        """Initialize PKCE exchange.

        Args:
            oauth_clients: Map of provider to OAuth client implementation
        """
        self.oauth_clients = oauth_clients

    def _client(self, provider: OAuthProvider) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            raise InvalidInputError(f"Unsupported provider: {provider}")
        return client

    async def begin_authorization(
        self, provider: OAuthProvider, state: str
    ) -> AuthorizationRequest:
        """Start an authorization for the provider.

        Raises:
            InvalidInputError: If provider not supported
        """
        with logfire.span(
            "pkce_exchange.begin_authorization", provider=provider.value
        ):
            return await self._client(provider).begin_authorization(state)

    async def exchange_code(self, provider: OAuthProvider, code: str, state: str) -> str:
        """Exchange an authorization code for an access token.

        Raises:
            InvalidOAuthStateError: If state is unknown, expired or already used
            ProviderError: If the token endpoint fails
        """
        with logfire.span("pkce_exchange.exchange_code", provider=provider.value):
            return await self._client(provider).exchange_code(code, state)

    async def fetch_user_info(
        self, provider: OAuthProvider, access_token: str
    ) -> ProviderProfile:
        """Fetch the provider profile for an access token.

        Raises:
            ProviderError: If the userinfo endpoint fails or omits required fields
        """
        with logfire.span("pkce_exchange.fetch_user_info", provider=provider.value):
            return await self._client(provider).fetch_user_info(access_token)
