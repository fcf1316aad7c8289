"""Reveal stored OAuth access token use case."""

import logfire
from pydantic import BaseModel

from enroll.adapter.crypto import AeadCipher
from enroll.application.usecase.base import BaseUseCase
from enroll.domain.error import AccountNotFoundError, DecryptionFailure, InvalidStateError
from enroll.domain.service import IdentityService
from enroll.domain.value import OAuthProvider, OperationFailure


class RevealOAuthAccessTokenRequest(BaseModel):
    """Lookup of an OAuth identity's stored token."""

    provider: OAuthProvider
    provider_id: str


class RevealOAuthAccessTokenUseCase(BaseUseCase):
    """Use case for decrypting the provider access token kept at rest.

    Used by integrations that call the provider API on the user's behalf.
    A tag mismatch is always reported, never treated as "no token".
    """

    def __init__(self, identity_service: IdentityService, cipher: AeadCipher) -> None:
        self.identity_service = identity_service
        self.cipher = cipher

    async def execute(
        self, request: RevealOAuthAccessTokenRequest
    ) -> str | OperationFailure:
        with logfire.span(
            "reveal_oauth_access_token.execute", provider=request.provider.value
        ):
            record = await self.identity_service.get_by_oauth_identity(
                request.provider, request.provider_id
            )
            if not record:
                return OperationFailure.from_error(
                    AccountNotFoundError("No account found for this provider identity")
                )

            if not record.oauth_token_encrypted:
                return OperationFailure.from_error(
                    InvalidStateError("No OAuth access token stored for this account")
                )

            try:
                return self.cipher.decrypt(record.oauth_token_encrypted)
            except DecryptionFailure as e:
                logfire.error(
                    "Stored OAuth token failed authentication",
                    user_id=str(record.user_id),
                )
                return OperationFailure.from_error(e)
