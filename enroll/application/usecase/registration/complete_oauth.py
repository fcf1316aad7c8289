"""Complete OAuth registration use case."""

import logfire
from pydantic import BaseModel

from enroll.adapter.error import ProviderError
from enroll.application.usecase.base import BaseUseCase
from enroll.domain.error import InvalidInputError, InvalidOAuthStateError
from enroll.domain.service import PkceExchange
from enroll.domain.value import OAuthProvider, OperationFailure, RegistrationReceipt

from .register_oauth import RegisterWithOAuthRequest, RegisterWithOAuthUseCase


class CompleteOAuthRegistrationRequest(BaseModel):
    """OAuth callback parameters.

    These parameters come from the OAuth provider in the callback URL.
    """

    provider: OAuthProvider
    code: str
    state: str


class CompleteOAuthRegistrationUseCase(BaseUseCase):
    """Use case for the OAuth callback: redeem the code and enroll the user."""

    def __init__(
        self,
        pkce_exchange: PkceExchange,
        register_with_oauth: RegisterWithOAuthUseCase,
    ) -> None:
        """Initialize complete OAuth registration use case.

        Args:
            pkce_exchange: OAuth code exchange service
            register_with_oauth: Use case that persists the new identity
        """
        self.pkce_exchange = pkce_exchange
        self.register_with_oauth = register_with_oauth

    async def execute(
        self, request: CompleteOAuthRegistrationRequest
    ) -> RegistrationReceipt | OperationFailure:
        """Execute the OAuth callback.

        Steps:
        1. Redeem the single-use state and exchange the code for a token
        2. Fetch the provider profile
        3. Register the identity with the profile and token

        Args:
            request: Callback parameters

        Returns:
            Registration receipt or a failure (INVALID_OAUTH_STATE when the
            state is unknown, expired or replayed; PROVIDER_ERROR when the
            provider misbehaves)
        """
        with logfire.span(
            "complete_oauth.execute", provider=request.provider.value
        ):
            try:
                access_token = await self.pkce_exchange.exchange_code(
                    request.provider, request.code, request.state
                )
                profile = await self.pkce_exchange.fetch_user_info(
                    request.provider, access_token
                )
            except (InvalidOAuthStateError, ProviderError, InvalidInputError) as e:
                logfire.warn(
                    "OAuth callback failed",
                    provider=request.provider.value,
                    kind=e.kind.value,
                    error=str(e),
                )
                return OperationFailure.from_error(e)

            return await self.register_with_oauth.execute(
                RegisterWithOAuthRequest(
                    email=profile.email,
                    first_name=profile.first_name,
                    last_name=profile.last_name,
                    provider=profile.provider,
                    provider_id=profile.provider_id,
                    access_token=access_token,
                )
            )
