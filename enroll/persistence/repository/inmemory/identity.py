"""In-memory identity repository for testing."""

from typing import Optional

from enroll.domain.error import DuplicateKeyError, StoreError
from enroll.domain.model.identity_record import IdentityRecord
from enroll.domain.repository.identity import IdentityRepository
from enroll.domain.value import OAuthProvider, UserId


class InMemoryIdentityRepository(IdentityRepository):
    """In-memory implementation of IdentityRepository for testing.

    Enforces the same unique keys as the database table.
    """

    def __init__(self) -> None:
        self._records: dict[UserId, IdentityRecord] = {}

    async def insert(self, record: IdentityRecord) -> IdentityRecord:
        """Insert record, rejecting duplicate unique keys."""
        if record.user_id in self._records:
            raise DuplicateKeyError("user_id")
        for existing in self._records.values():
            if existing.email_normalized == record.email_normalized:
                raise DuplicateKeyError("email_normalized")
            if (
                record.oauth_provider is not None
                and existing.oauth_provider == record.oauth_provider
                and existing.oauth_provider_id == record.oauth_provider_id
            ):
                raise DuplicateKeyError("oauth_identity")

        self._records[record.user_id] = record
        return record

    async def update(self, record: IdentityRecord) -> None:
        """Replace stored record."""
        if record.user_id not in self._records:
            raise StoreError(f"Identity record not found: {record.user_id}")
        self._records[record.user_id] = record

    async def find_by_id(self, user_id: UserId) -> Optional[IdentityRecord]:
        """Find record by user ID."""
        return self._records.get(user_id)

    async def find_by_normalized_email(
        self, email_normalized: str
    ) -> Optional[IdentityRecord]:
        """Find record by normalized email."""
        for record in self._records.values():
            if record.email_normalized == email_normalized:
                return record
        return None

    async def find_by_oauth_identity(
        self, provider: OAuthProvider, provider_id: str
    ) -> Optional[IdentityRecord]:
        """Find record by OAuth provider identity."""
        for record in self._records.values():
            if (
                record.oauth_provider == provider
                and record.oauth_provider_id == provider_id
            ):
                return record
        return None

    async def find_by_verification_token_hash(
        self, token_hash: str
    ) -> Optional[IdentityRecord]:
        """Find record by outstanding or consumed verification token hash."""
        for record in self._records.values():
            if token_hash in (
                record.verification_token_hash,
                record.consumed_token_hash,
            ):
                return record
        return None
