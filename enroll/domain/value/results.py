"""Tagged operation results.

Registration operations return either a success value or an
`OperationFailure`, so callers can branch on `kind` instead of catching
exception types:

    match await engine.register_with_email(...):
        case OperationFailure(kind=ErrorKind.DUPLICATE_EMAIL):
            ...
        case RegistrationReceipt(user_id=user_id):
            ...
"""

from enum import Enum

from pydantic import Field

from enroll.domain.value.common import ValueObject
from enroll.domain.value.identifiers import UserId


class ErrorKind(str, Enum):
    """Failure categories reported to callers."""

    VALIDATION_ERROR = "validation_error"
    INVALID_INPUT = "invalid_input"
    DUPLICATE_EMAIL = "duplicate_email"
    ACCOUNT_NOT_FOUND = "account_not_found"
    INVALID_STATE = "invalid_state"
    INVALID_TOKEN = "invalid_token"
    INVALID_OAUTH_STATE = "invalid_oauth_state"
    PROVIDER_ERROR = "provider_error"
    NOTIFICATION_FAILURE = "notification_failure"
    DECRYPTION_FAILURE = "decryption_failure"
    INTERNAL_ERROR = "internal_error"


class OperationFailure(ValueObject):
    """Failed operation.

    `errors` lists every failing rule for validation failures and is empty
    otherwise.
    """

    kind: ErrorKind
    message: str
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def from_error(cls, error: Exception) -> "OperationFailure":
        """Build a failure from a domain or adapter error."""
        return cls(
            kind=getattr(error, "kind", ErrorKind.INTERNAL_ERROR),
            message=str(error),
            errors=list(getattr(error, "errors", [])),
        )


class RegistrationReceipt(ValueObject):
    """Successful registration.

    Never carries the verification token, its hash, or any credential.
    """

    user_id: UserId
    email: str
    verified: bool
    message: str
    provider: str | None = None


class VerificationOutcome(ValueObject):
    """Result of an email verification attempt."""

    success: bool
    message: str
    kind: ErrorKind | None = None  # Set when success is False


class ResendReceipt(ValueObject):
    """A fresh verification email was sent."""

    email: str
    message: str = "Verification email sent. Please check your inbox."


class ValidationResult(ValueObject):
    """Outcome of one or more validation rules."""

    valid: bool
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def combine(cls, *results: "ValidationResult") -> "ValidationResult":
        """Merge results, keeping every error in order."""
        errors = [error for result in results for error in result.errors]
        return cls(valid=not errors, errors=errors)
