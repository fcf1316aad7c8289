"""Registration engine facade.

Single entry point for every registration operation. Each method builds
the request model for its use case and returns that use case's result.
"""

from enroll.domain.value import (
    AuthorizationRequest,
    OAuthProvider,
    OperationFailure,
    RegistrationReceipt,
    ResendReceipt,
    VerificationOutcome,
)

from .begin_oauth import BeginOAuthRegistrationRequest, BeginOAuthRegistrationUseCase
from .complete_oauth import (
    CompleteOAuthRegistrationRequest,
    CompleteOAuthRegistrationUseCase,
)
from .register_email import RegisterWithEmailRequest, RegisterWithEmailUseCase
from .register_oauth import RegisterWithOAuthRequest, RegisterWithOAuthUseCase
from .resend_verification import ResendVerificationRequest, ResendVerificationUseCase
from .reveal_token import RevealOAuthAccessTokenRequest, RevealOAuthAccessTokenUseCase
from .verify_email import VerifyEmailRequest, VerifyEmailUseCase


class RegistrationEngine:
    """Registration and verification state machine.

    EMAIL identities go Unregistered → PendingVerification → Verified, with
    resends looping in PendingVerification. OAUTH identities go straight
    from Unregistered to Verified.
    """

    def __init__(
        self,
        register_with_email: RegisterWithEmailUseCase,
        register_with_oauth: RegisterWithOAuthUseCase,
        verify_email: VerifyEmailUseCase,
        resend_verification: ResendVerificationUseCase,
        begin_oauth: BeginOAuthRegistrationUseCase,
        complete_oauth: CompleteOAuthRegistrationUseCase,
        reveal_token: RevealOAuthAccessTokenUseCase,
    ) -> None:
        self._register_with_email = register_with_email
        self._register_with_oauth = register_with_oauth
        self._verify_email = verify_email
        self._resend_verification = resend_verification
        self._begin_oauth = begin_oauth
        self._complete_oauth = complete_oauth
        self._reveal_token = reveal_token

    async def register_with_email(
        self,
        email: str | None,
        password: str | None,
        first_name: str | None,
        last_name: str | None,
    ) -> RegistrationReceipt | OperationFailure:
        return await self._register_with_email.execute(
            RegisterWithEmailRequest(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
            )
        )

    async def register_with_oauth(
        self,
        email: str | None,
        first_name: str,
        last_name: str,
        provider: OAuthProvider,
        provider_id: str,
        access_token: str | None,
    ) -> RegistrationReceipt | OperationFailure:
        return await self._register_with_oauth.execute(
            RegisterWithOAuthRequest(
                email=email,
                first_name=first_name,
                last_name=last_name,
                provider=provider,
                provider_id=provider_id,
                access_token=access_token,
            )
        )

    async def verify_email(self, token: str | None) -> VerificationOutcome:
        return await self._verify_email.execute(VerifyEmailRequest(token=token))

    async def resend_verification_email(
        self, email: str | None
    ) -> ResendReceipt | OperationFailure:
        return await self._resend_verification.execute(
            ResendVerificationRequest(email=email)
        )

    async def begin_oauth_registration(
        self, provider: OAuthProvider
    ) -> AuthorizationRequest | OperationFailure:
        return await self._begin_oauth.execute(
            BeginOAuthRegistrationRequest(provider=provider)
        )

    async def complete_oauth_registration(
        self, provider: OAuthProvider, code: str, state: str
    ) -> RegistrationReceipt | OperationFailure:
        return await self._complete_oauth.execute(
            CompleteOAuthRegistrationRequest(provider=provider, code=code, state=state)
        )

    async def reveal_oauth_access_token(
        self, provider: OAuthProvider, provider_id: str
    ) -> str | OperationFailure:
        """Decrypt the access token stored for an OAuth identity."""
        return await self._reveal_token.execute(
            RevealOAuthAccessTokenRequest(provider=provider, provider_id=provider_id)
        )
