"""Resend verification email use case."""

import logfire
from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase, send_notification
from enroll.config import Settings
from enroll.domain.error import (
    AccountNotFoundError,
    InvalidStateError,
    NotificationFailure,
    ValidationError,
)
from enroll.domain.service import EmailNotifier, IdentityService, TokenCodec
from enroll.domain.value import OperationFailure, RegistrationMethod, ResendReceipt


class ResendVerificationRequest(BaseModel):
    """Resend verification request."""

    email: str | None = None


class ResendVerificationUseCase(BaseUseCase):
    """Use case for issuing a fresh verification token.

    The previous token stops working as soon as the new hash is stored,
    even if the email then fails to send.
    """

    def __init__(
        self,
        identity_service: IdentityService,
        token_codec: TokenCodec,
        email_notifier: EmailNotifier,
        settings: Settings,
    ) -> None:
        self.identity_service = identity_service
        self.token_codec = token_codec
        self.email_notifier = email_notifier
        self.settings = settings

    async def execute(
        self, request: ResendVerificationRequest
    ) -> ResendReceipt | OperationFailure:
        if not request.email:
            return OperationFailure.from_error(ValidationError(["Email is required"]))

        with logfire.span("resend_verification.execute"):
            record = await self.identity_service.get_by_email(request.email)
            if not record:
                return OperationFailure.from_error(AccountNotFoundError())

            if record.email_verified:
                return OperationFailure.from_error(
                    InvalidStateError("Email is already verified")
                )

            if record.registration_method != RegistrationMethod.EMAIL:
                return OperationFailure.from_error(
                    InvalidStateError("OAuth accounts do not require verification")
                )

            token = self.token_codec.generate()
            record = await self.identity_service.save(
                record.rotate_verification_token(self.token_codec.hash(token))
            )

            try:
                await send_notification(
                    self.email_notifier.send_verification_email(
                        record.email, record.first_name, token
                    ),
                    self.settings.registration.notification_timeout_seconds,
                )
            except NotificationFailure as e:
                logfire.error(
                    "Verification email failed",
                    user_id=str(record.user_id),
                    error=str(e),
                )
                return OperationFailure.from_error(e)

            logfire.info("Verification email resent", user_id=str(record.user_id))
            return ResendReceipt(email=record.email)
