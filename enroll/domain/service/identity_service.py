"""Identity record domain service."""

import logfire

from enroll.domain.model.identity_record import IdentityRecord
from enroll.domain.repository.identity import IdentityRepository
from enroll.domain.value import OAuthProvider

from .base import Service


class IdentityService(Service):
    """Domain service for identity record lookups and writes."""

    def __init__(self, identity_repository: IdentityRepository) -> None:
        """Initialize identity service.

        Args:
            identity_repository: Identity repository
        """
        self.identity_repository = identity_repository

    async def get_by_email(self, email: str) -> IdentityRecord | None:
        """Get record by email address, compared case-insensitively.

        Args:
            email: Email address in any case

        Returns:
            Record if found, None otherwise
        """
        with logfire.span("identity_service.get_by_email"):
            record = await self.identity_repository.find_by_normalized_email(
                email.lower()
            )
            if record:
                logfire.info("Identity found", user_id=str(record.user_id))
            else:
                logfire.info("Identity not found for email")
            return record

    async def get_by_oauth_identity(
        self, provider: OAuthProvider, provider_id: str
    ) -> IdentityRecord | None:
        """Get record by OAuth provider identity.

        Args:
            provider: OAuth provider
            provider_id: Provider-specific user ID

        Returns:
            Record if found, None otherwise
        """
        with logfire.span(
            "identity_service.get_by_oauth_identity",
            provider=provider.value,
            provider_id=provider_id,
        ):
            record = await self.identity_repository.find_by_oauth_identity(
                provider, provider_id
            )
            if record:
                logfire.info(
                    "Identity found",
                    provider=provider.value,
                    user_id=str(record.user_id),
                )
            else:
                logfire.info(
                    "Identity not found",
                    provider=provider.value,
                    provider_id=provider_id,
                )
            return record

    async def get_by_verification_token_hash(
        self, token_hash: str
    ) -> IdentityRecord | None:
        """Get record holding the given outstanding verification token hash."""
        with logfire.span("identity_service.get_by_verification_token_hash"):
            return await self.identity_repository.find_by_verification_token_hash(
                token_hash
            )

    async def create(self, record: IdentityRecord) -> IdentityRecord:
        """Insert a new record.

        Raises:
            DuplicateKeyError: If the email or OAuth identity is already taken
        """
        with logfire.span(
            "identity_service.create",
            user_id=str(record.user_id),
            registration_method=record.registration_method.value,
        ):
            saved = await self.identity_repository.insert(record)
            logfire.info(
                "Identity created",
                user_id=str(saved.user_id),
                registration_method=saved.registration_method.value,
                email_verified=saved.email_verified,
            )
            return saved

    async def save(self, record: IdentityRecord) -> IdentityRecord:
        """Persist a changed record value."""
        with logfire.span("identity_service.save", user_id=str(record.user_id)):
            await self.identity_repository.update(record)
            logfire.info(
                "Identity updated",
                user_id=str(record.user_id),
                email_verified=record.email_verified,
            )
            return record
