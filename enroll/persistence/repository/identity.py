"""IdentityRecord repository implementation using PostgreSQL."""

from typing import Any, Optional

import logfire
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from enroll.domain.error import DuplicateKeyError, StoreError
from enroll.domain.model.identity_record import IdentityRecord
from enroll.domain.repository.identity import IdentityRepository
from enroll.domain.value import OAuthProvider, UserId
from enroll.persistence.mappers import identity_record_to_dict, row_to_identity_record
from enroll.persistence.tables import identity_records_table


class PostgresIdentityRepository(IdentityRepository):
    """PostgreSQL implementation of IdentityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def insert(self, record: IdentityRecord) -> IdentityRecord:
        """Insert identity record.

        Runs inside a savepoint so a unique violation leaves the request
        transaction usable.

        Raises:
            DuplicateKeyError: If email or OAuth identity is already taken
        """
        stmt = identity_records_table.insert().values(
            **identity_record_to_dict(record)
        )
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            constraint = _constraint_name(e)
            logfire.warn("Identity insert rejected", constraint=constraint)
            raise DuplicateKeyError(constraint) from e
        except (SQLAlchemyError, TimeoutError) as e:
            raise StoreError(f"Failed to insert identity record: {e}") from e
        return record

    async def update(self, record: IdentityRecord) -> None:
        """Replace identity record with the same user_id."""
        data = identity_record_to_dict(record)
        # Immutable columns
        data.pop("user_id")
        data.pop("created_at")
        data.pop("registration_method")

        stmt = (
            identity_records_table.update()
            .where(identity_records_table.c.user_id == record.user_id)
            .values(**data)
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except (SQLAlchemyError, TimeoutError) as e:
            raise StoreError(f"Failed to update identity record: {e}") from e

        if result.rowcount == 0:
            raise StoreError(f"Identity record not found: {record.user_id}")

    async def find_by_id(self, user_id: UserId) -> Optional[IdentityRecord]:
        """Get identity record by user ID."""
        return await self._find_one(identity_records_table.c.user_id == user_id)

    async def find_by_normalized_email(
        self, email_normalized: str
    ) -> Optional[IdentityRecord]:
        """Get identity record by normalized email."""
        return await self._find_one(
            identity_records_table.c.email_normalized == email_normalized
        )

    async def find_by_oauth_identity(
        self, provider: OAuthProvider, provider_id: str
    ) -> Optional[IdentityRecord]:
        """Get identity record by OAuth provider identity."""
        return await self._find_one(
            identity_records_table.c.oauth_provider == provider.value,
            identity_records_table.c.oauth_provider_id == provider_id,
        )

    async def find_by_verification_token_hash(
        self, token_hash: str
    ) -> Optional[IdentityRecord]:
        """Get identity record by outstanding or consumed verification token hash."""
        return await self._find_one(
            or_(
                identity_records_table.c.verification_token_hash == token_hash,
                identity_records_table.c.consumed_token_hash == token_hash,
            )
        )

    async def _find_one(self, *conditions: Any) -> Optional[IdentityRecord]:
        stmt = select(identity_records_table).where(*conditions)
        try:
            result = await self.session.execute(stmt)
        except (SQLAlchemyError, TimeoutError) as e:
            raise StoreError(f"Failed to query identity records: {e}") from e
        row = result.mappings().first()

        if not row:
            return None

        return row_to_identity_record(dict(row))


def _constraint_name(error: IntegrityError) -> str:
    """Best-effort name of the violated constraint."""
    orig = getattr(error, "orig", None)
    name = getattr(orig, "constraint_name", None)
    if name is None:
        name = getattr(getattr(orig, "__cause__", None), "constraint_name", None)
    return name or "unique"
