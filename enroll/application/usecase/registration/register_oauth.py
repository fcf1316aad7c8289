"""OAuth registration use case."""

import logfire
from pydantic import BaseModel

from enroll.adapter.crypto import AeadCipher
from enroll.application.usecase.base import BaseUseCase, send_notification
from enroll.config import Settings
from enroll.domain.error import (
    DuplicateEmailError,
    DuplicateKeyError,
    NotificationFailure,
    ValidationError,
)
from enroll.domain.model.identity_record import IdentityRecord
from enroll.domain.service import EmailNotifier, IdentityService, ValidationService
from enroll.domain.value import (
    OAuthProvider,
    OperationFailure,
    RegistrationReceipt,
    ValidationResult,
)

OAUTH_REGISTRATION_MESSAGE = "Registration successful. Welcome!"


class RegisterWithOAuthRequest(BaseModel):
    """OAuth registration request built from a provider profile."""

    email: str | None = None
    first_name: str = ""
    last_name: str = ""
    provider: OAuthProvider
    provider_id: str
    access_token: str | None = None


class RegisterWithOAuthUseCase(BaseUseCase):
    """Use case for enrolling an identity vouched for by an OAuth provider.

    The provider has already verified the address, so the record is created
    verified and only a welcome email is sent.
    """

    def __init__(
        self,
        validation_service: ValidationService,
        identity_service: IdentityService,
        cipher: AeadCipher,
        email_notifier: EmailNotifier,
        settings: Settings,
    ) -> None:
        self.validation_service = validation_service
        self.identity_service = identity_service
        self.cipher = cipher
        self.email_notifier = email_notifier
        self.settings = settings

    async def execute(
        self, request: RegisterWithOAuthRequest
    ) -> RegistrationReceipt | OperationFailure:
        """Execute OAuth registration.

        The access token, when present, is stored encrypted. A failed
        welcome email is logged and does not fail the registration.

        Args:
            request: Provider profile and access token

        Returns:
            Receipt naming the provider, or a failure
        """
        with logfire.span(
            "register_with_oauth.execute", provider=request.provider.value
        ):
            validation = ValidationResult.combine(
                self.validation_service.validate_email_format(request.email),
                self.validation_service.validate_names(
                    request.first_name, request.last_name, required=False
                ),
            )
            if not request.provider_id:
                validation = ValidationResult.combine(
                    validation,
                    ValidationResult(
                        valid=False, errors=["Provider user ID is required"]
                    ),
                )
            if not validation.valid:
                return OperationFailure.from_error(ValidationError(validation.errors))

            email = request.email
            if await self.validation_service.is_duplicate(email.lower()):
                logfire.info(
                    "Registration rejected - duplicate email",
                    provider=request.provider.value,
                )
                return OperationFailure.from_error(DuplicateEmailError())

            existing = await self.identity_service.get_by_oauth_identity(
                request.provider, request.provider_id
            )
            if existing:
                logfire.info(
                    "Registration rejected - provider identity already enrolled",
                    provider=request.provider.value,
                    user_id=str(existing.user_id),
                )
                return OperationFailure.from_error(DuplicateEmailError())

            encrypted_token = None
            if request.access_token:
                encrypted_token = self.cipher.encrypt(request.access_token)

            record = IdentityRecord.for_oauth(
                email=email,
                first_name=request.first_name,
                last_name=request.last_name,
                provider=request.provider,
                provider_id=request.provider_id,
                oauth_token_encrypted=encrypted_token,
            )

            try:
                record = await self.identity_service.create(record)
            except DuplicateKeyError as e:
                logfire.info(
                    "Registration rejected - unique key",
                    key=e.key,
                    provider=request.provider.value,
                )
                return OperationFailure.from_error(DuplicateEmailError())

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

            return RegistrationReceipt(
                user_id=record.user_id,
                email=record.email,
                verified=True,
                message=OAUTH_REGISTRATION_MESSAGE,
                provider=request.provider.value,
            )
