"""Domain layer errors.

Every error carries the `ErrorKind` tag that use cases report back to
callers in an `OperationFailure`.
"""

from enroll.domain.value.results import ErrorKind


class DomainError(Exception):
    """Base domain error."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR


class ValidationError(DomainError):
    """One or more validation rules failed.

    All failing rules are collected, not just the first one.
    """

    kind = ErrorKind.VALIDATION_ERROR

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("Validation failed: " + ", ".join(self.errors))


class InvalidInputError(DomainError, ValueError):
    """A primitive received an empty or malformed argument."""

    kind = ErrorKind.INVALID_INPUT


class DuplicateEmailError(DomainError):
    """An account already exists for this email address.

    The message is the same whatever method the existing account used.
    """

    kind = ErrorKind.DUPLICATE_EMAIL

    def __init__(self) -> None:
        super().__init__(
            "An account with this email already exists. "
            "Please use a different email or sign in."
        )


class AccountNotFoundError(DomainError):
    """No account matches the lookup."""

    kind = ErrorKind.ACCOUNT_NOT_FOUND

    def __init__(self, message: str = "No account found with this email"):
        super().__init__(message)


class InvalidStateError(DomainError):
    """Operation is not allowed in the record's current state."""

    kind = ErrorKind.INVALID_STATE


class InvalidOAuthStateError(DomainError):
    """PKCE state was never issued, has expired, or was already redeemed."""

    kind = ErrorKind.INVALID_OAUTH_STATE

    def __init__(
        self, message: str = "Invalid state parameter or PKCE verifier not found"
    ):
        super().__init__(message)


class DecryptionFailure(DomainError):
    """Ciphertext failed authentication (tampered data or wrong key)."""

    kind = ErrorKind.DECRYPTION_FAILURE


class NotificationFailure(DomainError):
    """Email dispatch failed or timed out."""

    kind = ErrorKind.NOTIFICATION_FAILURE


class DuplicateKeyError(DomainError):
    """Store rejected an insert on a unique key."""

    kind = ErrorKind.DUPLICATE_EMAIL

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Duplicate value for unique key: {key}")


class StoreError(DomainError):
    """Persistence layer failed or timed out."""

    kind = ErrorKind.INTERNAL_ERROR
