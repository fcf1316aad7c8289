"""Domain value objects for identity registration."""

from enroll.domain.value.identifiers import UserId
from enroll.domain.value.results import (
    ErrorKind,
    OperationFailure,
    RegistrationReceipt,
    ResendReceipt,
    ValidationResult,
    VerificationOutcome,
)
from enroll.domain.value.types import (
    AuthorizationRequest,
    OAuthProvider,
    ProviderProfile,
    RegistrationMethod,
)

__all__ = [
    # Identifiers
    "UserId",
    # Types
    "AuthorizationRequest",
    "OAuthProvider",
    "ProviderProfile",
    "RegistrationMethod",
    # Results
    "ErrorKind",
    "OperationFailure",
    "RegistrationReceipt",
    "ResendReceipt",
    "ValidationResult",
    "VerificationOutcome",
]
