"""Identity record entity.

The single persisted entity: one registered identity, enrolled either with
email/password or through an OAuth provider.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import Field, model_validator

from enroll.domain.model.common import DomainModel
from enroll.domain.value import OAuthProvider, RegistrationMethod, UserId

NAME_MAX_LENGTH = 100


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IdentityRecord(DomainModel):
    """Registered identity.

    Business rules:
    - email_normalized is always the lower-cased email
    - EMAIL records carry a password hash and no OAuth identity
    - OAUTH records carry provider + provider id and no password hash
    - registration_method and created_at never change
    - OAUTH records are verified from the start
    """

    user_id: UserId = Field(default_factory=lambda: UserId(uuid4()))
    email: str
    email_normalized: str
    password_hash: Optional[str] = None
    first_name: str = Field(max_length=NAME_MAX_LENGTH)
    last_name: str = Field(max_length=NAME_MAX_LENGTH)
    registration_method: RegistrationMethod
    oauth_provider: Optional[OAuthProvider] = None
    oauth_provider_id: Optional[str] = None
    oauth_token_encrypted: Optional[str] = None
    email_verified: bool = False
    verification_token_hash: Optional[str] = None
    # Hash of the token that completed verification, kept so a repeated
    # click on the same link can be answered with "already verified"
    consumed_token_hash: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def check_invariants(self) -> "IdentityRecord":
        """Reject records whose credentials do not match their method."""
        if self.email_normalized != self.email.lower():
            raise ValueError("email_normalized must be the lower-cased email")

        has_password = self.password_hash is not None
        has_oauth = (
            self.oauth_provider is not None and self.oauth_provider_id is not None
        )
        if self.registration_method == RegistrationMethod.EMAIL:
            has_any_oauth = (
                self.oauth_provider is not None or self.oauth_provider_id is not None
            )
            if not has_password or has_any_oauth:
                raise ValueError(
                    "EMAIL records need a password hash and no OAuth identity"
                )
        else:
            if has_password or not has_oauth:
                raise ValueError(
                    "OAUTH records need a provider identity and no password hash"
                )
        return self

    @classmethod
    def for_email(
        cls,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        verification_token_hash: str,
        now: datetime | None = None,
    ) -> "IdentityRecord":
        """New unverified email/password identity."""
        now = now or utcnow()
        return cls(
            email=email,
            email_normalized=email.lower(),
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            registration_method=RegistrationMethod.EMAIL,
            email_verified=False,
            verification_token_hash=verification_token_hash,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def for_oauth(
        cls,
        email: str,
        first_name: str,
        last_name: str,
        provider: OAuthProvider,
        provider_id: str,
        oauth_token_encrypted: str | None,
        now: datetime | None = None,
    ) -> "IdentityRecord":
        """New identity enrolled through an OAuth provider, verified up front."""
        now = now or utcnow()
        return cls(
            email=email,
            email_normalized=email.lower(),
            first_name=first_name,
            last_name=last_name,
            registration_method=RegistrationMethod.OAUTH,
            oauth_provider=provider,
            oauth_provider_id=provider_id,
            oauth_token_encrypted=oauth_token_encrypted,
            email_verified=True,
            created_at=now,
            updated_at=now,
        )

    def mark_verified(self, now: datetime | None = None) -> "IdentityRecord":
        """Copy marked verified, with the single-use token hash cleared."""
        return self.model_copy(
            update={
                "email_verified": True,
                "verification_token_hash": None,
                "consumed_token_hash": self.verification_token_hash,
                "updated_at": now or utcnow(),
            }
        )

    def rotate_verification_token(
        self, token_hash: str, now: datetime | None = None
    ) -> "IdentityRecord":
        """Copy carrying a new outstanding verification token hash."""
        return self.model_copy(
            update={
                "verification_token_hash": token_hash,
                "updated_at": now or utcnow(),
            }
        )
