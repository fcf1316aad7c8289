"""Integration tests for PostgresIdentityRepository.

Require a PostgreSQL database at DATABASE__URL with migrations applied
(`python scripts/run_migrations.py`).
"""

import os
from uuid import uuid4

import pytest

from enroll.domain.error import DuplicateKeyError
from enroll.domain.model import IdentityRecord
from enroll.domain.repository import IdentityRepository
from enroll.domain.value import OAuthProvider
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ, reason="DATABASE__URL not set"
)

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


def unique_email() -> str:
    return f"user-{uuid4().hex[:12]}@Example.com"


class TestIdentityRepositoryIntegration:
    """Integration tests for PostgresIdentityRepository."""

    @pytest.mark.asyncio
    async def test_insert_and_find_by_normalized_email(self, integration_env):
        # Arrange
        repository = await integration_env.get(IdentityRepository)
        email = unique_email()
        record = IdentityRecord.for_email(
            email=email,
            password_hash="$2b$04$hash",
            first_name="Jo",
            last_name="Do",
            verification_token_hash=uuid4().hex * 2,
        )

        # Act
        await repository.insert(record)
        found = await repository.find_by_normalized_email(email.lower())

        # Assert
        assert found is not None
        assert found.user_id == record.user_id
        assert found.email == email
        assert found.email_verified is False

    @pytest.mark.asyncio
    async def test_duplicate_email_differing_in_case(self, integration_env):
        """The unique index on email_normalized rejects case variants."""
        repository = await integration_env.get(IdentityRepository)
        email = unique_email()
        await repository.insert(
            IdentityRecord.for_email(
                email=email,
                password_hash="$2b$04$hash",
                first_name="Jo",
                last_name="Do",
                verification_token_hash=uuid4().hex * 2,
            )
        )

        with pytest.raises(DuplicateKeyError) as exc_info:
            await repository.insert(
                IdentityRecord.for_email(
                    email=email.upper(),
                    password_hash="$2b$04$hash",
                    first_name="Jo",
                    last_name="Do",
                    verification_token_hash=uuid4().hex * 2,
                )
            )

        assert exc_info.value.key == "uq_identity_email_normalized"

    @pytest.mark.asyncio
    async def test_verified_record_is_found_by_consumed_hash(self, integration_env):
        repository = await integration_env.get(IdentityRepository)
        token_hash = uuid4().hex * 2
        record = await repository.insert(
            IdentityRecord.for_email(
                email=unique_email(),
                password_hash="$2b$04$hash",
                first_name="Jo",
                last_name="Do",
                verification_token_hash=token_hash,
            )
        )

        await repository.update(record.mark_verified())
        found = await repository.find_by_verification_token_hash(token_hash)

        assert found is not None
        assert found.email_verified is True
        assert found.verification_token_hash is None

    @pytest.mark.asyncio
    async def test_oauth_identity_lookup(self, integration_env):
        repository = await integration_env.get(IdentityRepository)
        provider_id = f"amzn1.account.{uuid4().hex}"
        record = await repository.insert(
            IdentityRecord.for_oauth(
                email=unique_email(),
                first_name="",
                last_name="",
                provider=OAuthProvider.AMAZON,
                provider_id=provider_id,
                oauth_token_encrypted="ciphertext",
            )
        )

        found = await repository.find_by_oauth_identity(
            OAuthProvider.AMAZON, provider_id
        )

        assert found == record
