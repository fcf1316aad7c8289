"""Email verification use case."""

import logfire
from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase, send_notification
from enroll.config import Settings
from enroll.domain.error import NotificationFailure
from enroll.domain.service import EmailNotifier, IdentityService, TokenCodec
from enroll.domain.value import ErrorKind, VerificationOutcome

INVALID_TOKEN_MESSAGE = "Invalid or expired verification token"
EXPIRED_TOKEN_MESSAGE = (
    "Verification token has expired. Please request a new verification email."
)


class VerifyEmailRequest(BaseModel):
    """Verification link follow-up."""

    token: str | None = None


class VerifyEmailUseCase(BaseUseCase):
    """Use case for redeeming a verification token.

    Idempotent: following the link of an already verified account succeeds
    without writing anything.
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

    async def execute(self, request: VerifyEmailRequest) -> VerificationOutcome:
        """Verify the email address holding this token.

        Unknown and expired tokens share the INVALID_TOKEN kind. The expiry
        window is counted from account creation, not from the latest resend.

        Args:
            request: Request carrying the plaintext token

        Returns:
            Verification outcome
        """
        if not request.token:
            return VerificationOutcome(
                success=False,
                message="Invalid verification token",
                kind=ErrorKind.INVALID_TOKEN,
            )

        with logfire.span("verify_email.execute"):
            record = await self.identity_service.get_by_verification_token_hash(
                self.token_codec.hash(request.token)
            )
            if not record:
                logfire.info("Verification rejected - unknown token")
                return VerificationOutcome(
                    success=False,
                    message=INVALID_TOKEN_MESSAGE,
                    kind=ErrorKind.INVALID_TOKEN,
                )

            if record.email_verified:
                return VerificationOutcome(
                    success=True, message="Email already verified"
                )

            if self.token_codec.is_expired(record.created_at):
                logfire.info(
                    "Verification rejected - token expired",
                    user_id=str(record.user_id),
                )
                return VerificationOutcome(
                    success=False,
                    message=EXPIRED_TOKEN_MESSAGE,
                    kind=ErrorKind.INVALID_TOKEN,
                )

            record = await self.identity_service.save(record.mark_verified())
            logfire.info("Email verified", user_id=str(record.user_id))

            try:
                await send_notification(
                    self.email_notifier.send_welcome_email(
                        record.email, record.first_name
                    ),
                    self.settings.registration.notification_timeout_seconds,
                )
            except NotificationFailure as e:
                logfire.warn(
                    "Welcome email failed",
                    user_id=str(record.user_id),
                    error=str(e),
                )

            return VerificationOutcome(
                success=True, message="Email verified successfully. Welcome!"
            )
