"""Application layer DI providers."""

from dishka import Scope, provide

from enroll.adapter.crypto import AeadCipher
from enroll.application.usecase.registration import (
    BeginOAuthRegistrationUseCase,
    CompleteOAuthRegistrationUseCase,
    RegisterWithEmailUseCase,
    RegisterWithOAuthUseCase,
    RegistrationEngine,
    ResendVerificationUseCase,
    RevealOAuthAccessTokenUseCase,
    VerifyEmailUseCase,
)
from enroll.config import Settings
from enroll.domain.service import (
    EmailNotifier,
    IdentityService,
    PasswordHasher,
    PkceExchange,
    TokenCodec,
    ValidationService,
)
from enroll.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    @provide
    def get_register_with_email_use_case(
        self,
        validation_service: ValidationService,
        identity_service: IdentityService,
        password_hasher: PasswordHasher,
        token_codec: TokenCodec,
        email_notifier: EmailNotifier,
        settings: Settings,
    ) -> RegisterWithEmailUseCase:
        return RegisterWithEmailUseCase(
            validation_service=validation_service,
            identity_service=identity_service,
            password_hasher=password_hasher,
            token_codec=token_codec,
            email_notifier=email_notifier,
            settings=settings,
        )

    @provide
    def get_register_with_oauth_use_case(
        self,
        validation_service: ValidationService,
        identity_service: IdentityService,
        cipher: AeadCipher,
        email_notifier: EmailNotifier,
        settings: Settings,
    ) -> RegisterWithOAuthUseCase:
        return RegisterWithOAuthUseCase(
            validation_service=validation_service,
            identity_service=identity_service,
            cipher=cipher,
            email_notifier=email_notifier,
            settings=settings,
        )

    @provide
    def get_verify_email_use_case(
        self,
        identity_service: IdentityService,
        token_codec: TokenCodec,
        email_notifier: EmailNotifier,
        settings: Settings,
    ) -> VerifyEmailUseCase:
        return VerifyEmailUseCase(
            identity_service=identity_service,
            token_codec=token_codec,
            email_notifier=email_notifier,
            settings=settings,
        )

    @provide
    def get_resend_verification_use_case(
        self,
        identity_service: IdentityService,
        token_codec: TokenCodec,
        email_notifier: EmailNotifier,
        settings: Settings,
    ) -> ResendVerificationUseCase:
        return ResendVerificationUseCase(
            identity_service=identity_service,
            token_codec=token_codec,
            email_notifier=email_notifier,
            settings=settings,
        )

    @provide
    def get_begin_oauth_use_case(
        self, pkce_exchange: PkceExchange
    ) -> BeginOAuthRegistrationUseCase:
        return BeginOAuthRegistrationUseCase(pkce_exchange=pkce_exchange)

    @provide
    def get_complete_oauth_use_case(
        self,
        pkce_exchange: PkceExchange,
        register_with_oauth: RegisterWithOAuthUseCase,
    ) -> CompleteOAuthRegistrationUseCase:
        return CompleteOAuthRegistrationUseCase(
            pkce_exchange=pkce_exchange, register_with_oauth=register_with_oauth
        )

    @provide
    def get_reveal_token_use_case(
        self, identity_service: IdentityService, cipher: AeadCipher
    ) -> RevealOAuthAccessTokenUseCase:
        return RevealOAuthAccessTokenUseCase(
            identity_service=identity_service, cipher=cipher
        )

    @provide
    def get_registration_engine(
        self,
        register_with_email: RegisterWithEmailUseCase,
        register_with_oauth: RegisterWithOAuthUseCase,
        verify_email: VerifyEmailUseCase,
        resend_verification: ResendVerificationUseCase,
        begin_oauth: BeginOAuthRegistrationUseCase,
        complete_oauth: CompleteOAuthRegistrationUseCase,
        reveal_token: RevealOAuthAccessTokenUseCase,
    ) -> RegistrationEngine:
        """Provide the registration engine facade."""
        return RegistrationEngine(
            register_with_email=register_with_email,
            register_with_oauth=register_with_oauth,
            verify_email=verify_email,
            resend_verification=resend_verification,
            begin_oauth=begin_oauth,
            complete_oauth=complete_oauth,
            reveal_token=reveal_token,
        )
