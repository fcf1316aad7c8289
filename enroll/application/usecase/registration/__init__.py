"""Registration use cases."""

from .begin_oauth import BeginOAuthRegistrationRequest, BeginOAuthRegistrationUseCase
from .complete_oauth import (
    CompleteOAuthRegistrationRequest,
    CompleteOAuthRegistrationUseCase,
)
from .engine import RegistrationEngine
from .register_email import RegisterWithEmailRequest, RegisterWithEmailUseCase
from .register_oauth import RegisterWithOAuthRequest, RegisterWithOAuthUseCase
from .resend_verification import ResendVerificationRequest, ResendVerificationUseCase
from .reveal_token import RevealOAuthAccessTokenRequest, RevealOAuthAccessTokenUseCase
from .verify_email import VerifyEmailRequest, VerifyEmailUseCase

__all__ = [
    "BeginOAuthRegistrationRequest",
    "BeginOAuthRegistrationUseCase",
    "CompleteOAuthRegistrationRequest",
    "CompleteOAuthRegistrationUseCase",
    "RegisterWithEmailRequest",
    "RegisterWithEmailUseCase",
    "RegisterWithOAuthRequest",
    "RegisterWithOAuthUseCase",
    "RegistrationEngine",
    "ResendVerificationRequest",
    "ResendVerificationUseCase",
    "RevealOAuthAccessTokenRequest",
    "RevealOAuthAccessTokenUseCase",
    "VerifyEmailRequest",
    "VerifyEmailUseCase",
]
