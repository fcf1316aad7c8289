"""Unit tests for VerifyEmailUseCase."""

from datetime import datetime, timedelta, timezone

import pytest
from dishka import AsyncContainer

from enroll.application.usecase.registration import RegistrationEngine
from enroll.domain.model import IdentityRecord
from enroll.domain.repository import IdentityRepository
from enroll.domain.service import EmailNotifier, TokenCodec
from enroll.domain.value import ErrorKind, RegistrationReceipt
from tests.conftest import VALID_PASSWORD
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def register(engine: RegistrationEngine, notifier, email="jo@example.com"):
    """Register an email identity and return (receipt, emailed token)."""
    receipt = await engine.register_with_email(email, VALID_PASSWORD, "Jo", "Do")
    assert isinstance(receipt, RegistrationReceipt)
    return receipt, notifier.last_token


class TestVerifyEmail:
    """Tests for email verification."""

    @pytest.mark.asyncio
    async def test_register_then_verify(self, unit_env: AsyncContainer):
        """The emailed token should verify the account and clear the hash."""
        # Arrange
        engine = await unit_env.get(RegistrationEngine)
        repository = await unit_env.get(IdentityRepository)
        notifier = await unit_env.get(EmailNotifier)
        receipt, token = await register(engine, notifier)

        # Act
        outcome = await engine.verify_email(token)

        # Assert
        assert outcome.success is True
        assert outcome.message == "Email verified successfully. Welcome!"
        assert outcome.kind is None

        record = await repository.find_by_id(receipt.user_id)
        assert record.email_verified is True
        assert record.verification_token_hash is None
        assert notifier.sent[-1].kind == "welcome"

    @pytest.mark.asyncio
    async def test_verification_is_idempotent(self, unit_env: AsyncContainer):
        """Following the same link twice should succeed both times."""
        engine = await unit_env.get(RegistrationEngine)
        repository = await unit_env.get(IdentityRepository)
        notifier = await unit_env.get(EmailNotifier)
        receipt, token = await register(engine, notifier)

        await engine.verify_email(token)
        verified = await repository.find_by_id(receipt.user_id)

        outcome = await engine.verify_email(token)

        assert outcome.success is True
        assert outcome.message == "Email already verified"
        # No second write and no second welcome email
        assert await repository.find_by_id(receipt.user_id) == verified
        assert [e.kind for e in notifier.sent].count("welcome") == 1

    @pytest.mark.asyncio
    async def test_expired_token(self, unit_env: AsyncContainer):
        """A token older than the window should be rejected."""
        # Arrange
        engine = await unit_env.get(RegistrationEngine)
        repository = await unit_env.get(IdentityRepository)
        codec = await unit_env.get(TokenCodec)
        token = codec.generate()
        created = datetime.now(timezone.utc) - timedelta(hours=25)
        record = await repository.insert(
            IdentityRecord.for_email(
                email="late@example.com",
                password_hash="$2b$04$hash",
                first_name="Late",
                last_name="User",
                verification_token_hash=codec.hash(token),
                now=created,
            )
        )

        # Act
        outcome = await engine.verify_email(token)

        # Assert
        assert outcome.success is False
        assert outcome.kind == ErrorKind.INVALID_TOKEN
        assert outcome.message == (
            "Verification token has expired. Please request a new verification email."
        )
        stored = await repository.find_by_id(record.user_id)
        assert stored.email_verified is False

    @pytest.mark.asyncio
    async def test_window_counts_from_creation_not_resend(
        self, unit_env: AsyncContainer
    ):
        """A fresh resend does not extend the window of an old account."""
        engine = await unit_env.get(RegistrationEngine)
        repository = await unit_env.get(IdentityRepository)
        notifier = await unit_env.get(EmailNotifier)
        codec = await unit_env.get(TokenCodec)
        await repository.insert(
            IdentityRecord.for_email(
                email="old@example.com",
                password_hash="$2b$04$hash",
                first_name="Old",
                last_name="User",
                verification_token_hash=codec.hash(codec.generate()),
                now=datetime.now(timezone.utc) - timedelta(days=3),
            )
        )

        await engine.resend_verification_email("old@example.com")
        outcome = await engine.verify_email(notifier.last_token)

        assert outcome.success is False
        assert outcome.kind == ErrorKind.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env: AsyncContainer):
        engine = await unit_env.get(RegistrationEngine)

        outcome = await engine.verify_email("never-issued-token")

        assert outcome.success is False
        assert outcome.kind == ErrorKind.INVALID_TOKEN
        assert outcome.message == "Invalid or expired verification token"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", None])
    async def test_empty_token(self, unit_env: AsyncContainer, token):
        engine = await unit_env.get(RegistrationEngine)

        outcome = await engine.verify_email(token)

        assert outcome.success is False
        assert outcome.kind == ErrorKind.INVALID_TOKEN
        assert outcome.message == "Invalid verification token"

    @pytest.mark.asyncio
    async def test_welcome_failure_does_not_undo_verification(
        self, unit_env: AsyncContainer
    ):
        engine = await unit_env.get(RegistrationEngine)
        repository = await unit_env.get(IdentityRepository)
        notifier = await unit_env.get(EmailNotifier)
        receipt, token = await register(engine, notifier)
        notifier.fail_welcome = True

        outcome = await engine.verify_email(token)

        assert outcome.success is True
        record = await repository.find_by_id(receipt.user_id)
        assert record.email_verified is True
