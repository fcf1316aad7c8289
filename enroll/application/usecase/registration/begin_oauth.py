"""Begin OAuth registration use case."""

import secrets

import logfire
from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.domain.error import InvalidInputError
from enroll.domain.service import PkceExchange
from enroll.domain.value import AuthorizationRequest, OAuthProvider, OperationFailure


class BeginOAuthRegistrationRequest(BaseModel):
    """Begin OAuth registration request."""

    provider: OAuthProvider


class BeginOAuthRegistrationUseCase(BaseUseCase):
    """Use case for starting an OAuth registration.

    Generates an unguessable state and returns the provider URL the user
    should be redirected to.
    """

    def __init__(self, pkce_exchange: PkceExchange) -> None:
        self.pkce_exchange = pkce_exchange

    async def execute(
        self, request: BeginOAuthRegistrationRequest
    ) -> AuthorizationRequest | OperationFailure:
        state = secrets.token_urlsafe(32)
        with logfire.span("begin_oauth.execute", provider=request.provider.value):
            try:
                return await self.pkce_exchange.begin_authorization(
                    request.provider, state
                )
            except InvalidInputError as e:
                return OperationFailure.from_error(e)
