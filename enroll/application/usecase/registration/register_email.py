"""Email/password registration use case."""

import asyncio

import logfire
from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase, send_notification
from enroll.config import Settings
from enroll.domain.error import (
    DuplicateEmailError,
    DuplicateKeyError,
    NotificationFailure,
    ValidationError,
)
from enroll.domain.model.identity_record import IdentityRecord
from enroll.domain.service import (
    EmailNotifier,
    IdentityService,
    PasswordHasher,
    TokenCodec,
    ValidationService,
)
from enroll.domain.value import OperationFailure, RegistrationReceipt

EMAIL_REGISTRATION_MESSAGE = (
    "Registration successful. Please check your email to verify your account."
)


class RegisterWithEmailRequest(BaseModel):
    """Email/password registration request.

    Fields are optional so missing input is reported by validation together
    with every other failing rule.
    """

    email: str | None = None
    password: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class RegisterWithEmailUseCase(BaseUseCase):
    """Use case for enrolling a new identity with email and password.

    The new identity starts in PendingVerification and a verification email
    carrying the plaintext token is sent.
    """

    def __init__(
        self,
        validation_service: ValidationService,
        identity_service: IdentityService,
        password_hasher: PasswordHasher,
        token_codec: TokenCodec,
        email_notifier: EmailNotifier,
        settings: Settings,
    ) -> None:
        """Initialize register with email use case.

        Args:
            validation_service: Registration input validation
            identity_service: Identity record domain service
            password_hasher: bcrypt password hasher
            token_codec: Verification token codec
            email_notifier: Outbound email collaborator
            settings: Application settings
        """
        self.validation_service = validation_service
        self.identity_service = identity_service
        self.password_hasher = password_hasher
        self.token_codec = token_codec
        self.email_notifier = email_notifier
        self.settings = settings

    async def execute(
        self, request: RegisterWithEmailRequest
    ) -> RegistrationReceipt | OperationFailure:
        """Execute email registration.

        Steps:
        1. Validate every input rule
        2. Reject a case-insensitive duplicate email
        3. Issue a verification token and hash the password
        4. Persist the unverified record
        5. Send the verification email

        If the email cannot be sent the record stays persisted in
        PendingVerification and NOTIFICATION_FAILURE is returned; the user
        can ask for a resend.

        Args:
            request: Registration input

        Returns:
            Receipt (never containing the token) or a failure
        """
        with logfire.span("register_with_email.execute"):
            validation = self.validation_service.validate_registration(
                request.email, request.password, request.first_name, request.last_name
            )
            if not validation.valid:
                return OperationFailure.from_error(ValidationError(validation.errors))

            email = request.email
            if await self.validation_service.is_duplicate(email.lower()):
                logfire.info("Registration rejected - duplicate email")
                return OperationFailure.from_error(DuplicateEmailError())

            token = self.token_codec.generate()

            # bcrypt is deliberately slow, keep it off the event loop
            password_hash = await asyncio.to_thread(
                self.password_hasher.hash, request.password
            )

            record = IdentityRecord.for_email(
                email=email,
                password_hash=password_hash,
                first_name=request.first_name,
                last_name=request.last_name,
                verification_token_hash=self.token_codec.hash(token),
            )

            try:
                record = await self.identity_service.create(record)
            except DuplicateKeyError as e:
                # Lost a race with a concurrent registration for the same email
                logfire.info("Registration rejected - unique key", key=e.key)
                return OperationFailure.from_error(DuplicateEmailError())

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

            return RegistrationReceipt(
                user_id=record.user_id,
                email=record.email,
                verified=False,
                message=EMAIL_REGISTRATION_MESSAGE,
            )
