"""Identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from enroll.domain.model.identity_record import IdentityRecord
from enroll.domain.value import OAuthProvider, UserId


class IdentityRepository(ABC):
    """Repository for IdentityRecord entity.

    Implementations enforce uniqueness of email, email_normalized and
    (oauth_provider, oauth_provider_id). That unique constraint, not the
    registration pre-check, is what keeps concurrent registrations for the
    same address from both succeeding.
    """

    @abstractmethod
    async def insert(self, record: IdentityRecord) -> IdentityRecord:
        """Insert a new record.

        Args:
            record: The record to insert

        Returns:
            The stored record

        Raises:
            DuplicateKeyError: If a unique key is already taken
        """
        pass

    @abstractmethod
    async def update(self, record: IdentityRecord) -> None:
        """Replace the stored record with the same user_id.

        Args:
            record: The new record value
        """
        pass

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[IdentityRecord]:
        """Find a record by user ID.

        Args:
            user_id: The record's unique identifier

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_normalized_email(
        self, email_normalized: str
    ) -> Optional[IdentityRecord]:
        """Find a record by lower-cased email address.

        Args:
            email_normalized: Lower-cased email address

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_oauth_identity(
        self, provider: OAuthProvider, provider_id: str
    ) -> Optional[IdentityRecord]:
        """Find a record by OAuth provider and provider subject ID.

        Args:
            provider: The OAuth provider
            provider_id: The user's stable ID at that provider

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_verification_token_hash(
        self, token_hash: str
    ) -> Optional[IdentityRecord]:
        """Find the record whose verification token has this hash.

        Matches the outstanding token and also the token that already
        completed verification, so repeated clicks resolve to the record.

        Args:
            token_hash: Hex digest of the verification token

        Returns:
            The record if found, None otherwise
        """
        pass
