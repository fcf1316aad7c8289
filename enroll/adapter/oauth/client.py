"""OAuth 2.0 clients for Google and Amazon.

Both providers use the Authorization Code flow with PKCE. They differ only
in endpoints, scopes, extra authorization parameters and userinfo shape.
"""

from urllib.parse import urlencode

import httpx
import logfire

from enroll.adapter.error import ProviderError
from enroll.adapter.oauth.pkce import generate_pkce_pair
from enroll.adapter.oauth.verifier_store import VerifierStore
from enroll.config import PLACEHOLDER
from enroll.domain.error import InvalidOAuthStateError
from enroll.domain.service.oauth_service import OAuthClient
from enroll.domain.value import AuthorizationRequest, OAuthProvider, ProviderProfile
from enroll.util.error import ConfigurationError


class PkceOAuthClient(OAuthClient):
    """OAuth 2.0 client with PKCE support.

    Subclasses set the provider endpoints and map the userinfo response.
    """

    authorize_url: str
    token_url: str
    user_info_url: str
    scope: str
    extra_authorize_params: dict[str, str] = {}

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        verifier_store: VerifierStore,
        timeout: float = 30.0,
        state_ttl_seconds: float = 600,
    ) -> None:
        """Initialize OAuth client.

        Args:
            client_id: OAuth client ID
            client_secret: OAuth client secret
            redirect_uri: Callback URL registered with the provider
            verifier_store: Store holding PKCE verifiers keyed by state
            timeout: Timeout in seconds for token and userinfo requests
            state_ttl_seconds: Lifetime of an unredeemed authorization attempt

        Raises:
            ConfigurationError: If credentials are missing or placeholders
        """
        for name, value in (
            ("client_id", client_id),
            ("client_secret", client_secret),
            ("redirect_uri", redirect_uri),
        ):
            if not value or value == PLACEHOLDER:
                raise ConfigurationError(
                    f"OAuth {self.provider.value} {name} is not configured"
                )

        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.verifier_store = verifier_store
        self.timeout = timeout
        self.state_ttl_seconds = state_ttl_seconds

    async def begin_authorization(self, state: str) -> AuthorizationRequest:
        code_verifier, code_challenge = generate_pkce_pair()

        # Store verifier for later token exchange
        await self.verifier_store.put(
            self._state_key(state), code_verifier, self.state_ttl_seconds
        )

        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": self.scope,
            "state": state,
            "code_challenge": code_challenge,
            "code_challenge_method": "S256",
            **self.extra_authorize_params,
        }
        auth_url = f"{self.authorize_url}?{urlencode(params)}"

        logfire.info(
            "OAuth authorization initiated",
            provider=self.provider.value,
            redirect_uri=self.redirect_uri,
        )
        return AuthorizationRequest(authorization_url=auth_url, state=state)

    async def exchange_code(self, code: str, state: str) -> str:
        """Exchange authorization code for access token.

        Args:
            code: Authorization code from callback
            state: State parameter from callback

        Returns:
            Access token

        Raises:
            InvalidOAuthStateError: If no live verifier exists for state, or
                the state was issued for another provider
            ProviderError: If token exchange fails
        """
        code_verifier = await self.verifier_store.pop(self._state_key(state))
        if not code_verifier:
            logfire.warn("OAuth state not found", provider=self.provider.value)
            raise InvalidOAuthStateError()

        data = {
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
            "code_verifier": code_verifier,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.token_url,
                    data=data,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                    timeout=self.timeout,
                )

                if not 200 <= response.status_code < 300:
                    logfire.error(
                        "OAuth token exchange failed",
                        provider=self.provider.value,
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise ProviderError(
                        f"Token exchange failed: {response.status_code}"
                    )

                result = response.json()
        except httpx.HTTPError as e:
            logfire.error(
                "OAuth token exchange HTTP error",
                provider=self.provider.value,
                error=str(e),
            )
            raise ProviderError(f"HTTP error during token exchange: {e}") from e
        except ValueError as e:
            raise ProviderError("Token response is not valid JSON") from e

        access_token = result.get("access_token") if isinstance(result, dict) else None
        if not access_token:
            raise ProviderError("Token response did not include an access token")
        return access_token

    async def fetch_user_info(self, access_token: str) -> ProviderProfile:
        """Get user information from the provider.

        Raises:
            ProviderError: If the request fails or omits email or user ID
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.user_info_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                    timeout=self.timeout,
                )

                if not 200 <= response.status_code < 300:
                    logfire.error(
                        "OAuth user info request failed",
                        provider=self.provider.value,
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise ProviderError(
                        f"User info request failed: {response.status_code}"
                    )

                result = response.json()
        except httpx.HTTPError as e:
            logfire.error(
                "OAuth user info HTTP error",
                provider=self.provider.value,
                error=str(e),
            )
            raise ProviderError(f"HTTP error fetching user info: {e}") from e
        except ValueError as e:
            raise ProviderError("User info response is not valid JSON") from e

        if not isinstance(result, dict):
            raise ProviderError("User info response is not a JSON object")

        profile = self._to_profile(result)
        logfire.info(
            "OAuth user info fetched",
            provider=self.provider.value,
            provider_id=profile.provider_id,
        )
        return profile

    def _state_key(self, state: str) -> str:
        # Providers may share one store; a state only redeems with its issuer
        return f"{self.provider.value}:{state}"

    def _to_profile(self, data: dict) -> ProviderProfile:
        """Map a provider userinfo body to a ProviderProfile."""
        raise NotImplementedError

    def _require(self, data: dict, field: str) -> str:
        value = data.get(field)
        if value is None or str(value) == "":
            raise ProviderError(f"User info response is missing {field}")
        return str(value)


class GoogleOAuthClient(PkceOAuthClient):
    """Google OAuth 2.0 client.

    Requests offline access with forced consent so a refresh token is issued.
    """

    provider = OAuthProvider.GOOGLE
    authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url = "https://oauth2.googleapis.com/token"
    user_info_url = "https://www.googleapis.com/oauth2/v2/userinfo"
    scope = "openid profile email"
    extra_authorize_params = {"access_type": "offline", "prompt": "consent"}

    def _to_profile(self, data: dict) -> ProviderProfile:
        return ProviderProfile(
            provider=self.provider,
            provider_id=self._require(data, "id"),
            email=self._require(data, "email"),
            first_name=data.get("given_name") or "",
            last_name=data.get("family_name") or "",
        )


class AmazonOAuthClient(PkceOAuthClient):
    """Login with Amazon client."""

    provider = OAuthProvider.AMAZON
    authorize_url = "https://www.amazon.com/ap/oa"
    token_url = "https://api.amazon.com/auth/o2/token"
    user_info_url = "https://api.amazon.com/user/profile"
    scope = "profile"

    def _to_profile(self, data: dict) -> ProviderProfile:
        # Amazon returns a single display name
        first_name, _, last_name = (data.get("name") or "").strip().partition(" ")
        return ProviderProfile(
            provider=self.provider,
            provider_id=self._require(data, "user_id"),
            email=self._require(data, "email"),
            first_name=first_name,
            last_name=last_name.strip(),
        )


class MockOAuthClient(OAuthClient):
    """Mock OAuth client for testing.

    Returns deterministic test data without making real API calls, but keeps
    single-use state semantics so callback replays still fail.
    """

    def __init__(
        self,
        provider: OAuthProvider,
        profile: ProviderProfile | None = None,
        access_token: str = "mock-access-token",
    ) -> None:
        self.provider = provider
        self.profile = profile or ProviderProfile(
            provider=provider,
            provider_id=f"mock-{provider.value}-123",
            email=f"mock@{provider.value}.example.com",
            first_name="Mock",
            last_name="User",
        )
        self.access_token = access_token
        self._states: set[str] = set()

    async def begin_authorization(self, state: str) -> AuthorizationRequest:
        self._states.add(state)
        return AuthorizationRequest(
            authorization_url=(
                f"https://oauth.example.com/{self.provider.value}/authorize"
                f"?state={state}&mock=true"
            ),
            state=state,
        )

    async def exchange_code(self, code: str, state: str) -> str:
        if state not in self._states:
            raise InvalidOAuthStateError()
        self._states.discard(state)
        return self.access_token

    async def fetch_user_info(self, access_token: str) -> ProviderProfile:
        return self.profile
