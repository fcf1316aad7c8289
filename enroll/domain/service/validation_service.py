"""Registration input validation service."""

import re

import logfire

from enroll.domain.model.identity_record import NAME_MAX_LENGTH
from enroll.domain.repository.identity import IdentityRepository
from enroll.domain.value import ValidationResult

from .base import Service
from .password_service import BCRYPT_MAX_BYTES

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9_+&*-]+(?:\.[a-zA-Z0-9_+&*-]+)*@(?:[a-zA-Z0-9-]+\.)+[a-zA-Z]{2,7}$"
)
SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
SPECIAL_CHAR_PATTERN = re.compile("[" + re.escape(SPECIAL_CHARACTERS) + "]")
DIGIT_PATTERN = re.compile(r"\d")
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128


class ValidationService(Service):
    """Validates registration input.

    Every rule is checked so callers can report all problems at once.
    """

    def __init__(self, identity_repository: IdentityRepository) -> None:
        """Initialize validation service.

        Args:
            identity_repository: Repository used for the duplicate check
        """
        self.identity_repository = identity_repository

    def validate_email_format(self, email: str | None) -> ValidationResult:
        if email is None or not email.strip():
            return ValidationResult(valid=False, errors=["Email is required"])
        if not EMAIL_PATTERN.match(email):
            return ValidationResult(
                valid=False,
                errors=["Email format is invalid. Please provide a valid email address"],
            )
        return ValidationResult(valid=True)

    def validate_password_complexity(self, password: str | None) -> ValidationResult:
        """Check length, special character and digit rules.

        The byte limit keeps multi-byte passwords within what bcrypt accepts.
        """
        if not password:
            return ValidationResult(valid=False, errors=["Password is required"])

        errors = []
        if len(password) < MIN_PASSWORD_LENGTH:
            errors.append(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        if len(password) > MAX_PASSWORD_LENGTH:
            errors.append(
                f"Password must be at most {MAX_PASSWORD_LENGTH} characters long"
            )
        elif len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            errors.append(
                f"Password must be at most {BCRYPT_MAX_BYTES} bytes when encoded"
            )
        if not SPECIAL_CHAR_PATTERN.search(password):
            errors.append(
                "Password must contain at least one special character "
                f"({SPECIAL_CHARACTERS})"
            )
        if not DIGIT_PATTERN.search(password):
            errors.append("Password must contain at least one number (0-9)")

        return ValidationResult(valid=not errors, errors=errors)

    def validate_names(
        self, first_name: str | None, last_name: str | None, required: bool = True
    ) -> ValidationResult:
        """Check name presence and length.

        Provider profiles may omit names, so OAuth registrations pass
        required=False and only the length rule applies.
        """
        errors = []
        for label, value in (("First name", first_name), ("Last name", last_name)):
            if value is None or not value.strip():
                if required:
                    errors.append(f"{label} is required")
            elif len(value) > NAME_MAX_LENGTH:
                errors.append(
                    f"{label} must be at most {NAME_MAX_LENGTH} characters long"
                )
        return ValidationResult(valid=not errors, errors=errors)

    def validate_registration(
        self,
        email: str | None,
        password: str | None,
        first_name: str | None,
        last_name: str | None,
    ) -> ValidationResult:
        """Validate a complete email/password registration."""
        result = ValidationResult.combine(
            self.validate_email_format(email),
            self.validate_password_complexity(password),
            self.validate_names(first_name, last_name),
        )
        if not result.valid:
            logfire.info("Registration input rejected", error_count=len(result.errors))
        return result

    async def is_duplicate(self, email_normalized: str) -> bool:
        """Whether any identity already uses this normalized email."""
        existing = await self.identity_repository.find_by_normalized_email(
            email_normalized
        )
        return existing is not None
