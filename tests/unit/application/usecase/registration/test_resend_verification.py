"""Unit tests for ResendVerificationUseCase."""

import pytest
from dishka import AsyncContainer

from enroll.application.usecase.registration import RegistrationEngine
from enroll.domain.repository import IdentityRepository
from enroll.domain.service import EmailNotifier
from enroll.domain.value import (
    ErrorKind,
    OAuthProvider,
    OperationFailure,
    ResendReceipt,
)
from tests.conftest import VALID_PASSWORD
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestResendVerification:
    """Tests for resending the verification email."""

    @pytest.mark.asyncio
    async def test_rotation_invalidates_previous_token(
        self, unit_env: AsyncContainer
    ):
        """Only the newest token should verify after a resend."""
        # Arrange
        engine = await unit_env.get(RegistrationEngine)
        notifier = await unit_env.get(EmailNotifier)
        await engine.register_with_email("jo@example.com", VALID_PASSWORD, "Jo", "Do")
        old_token = notifier.last_token

        # Act
        result = await engine.resend_verification_email("Jo@Example.com")

        # Assert
        assert isinstance(result, ResendReceipt)
        assert result.email == "jo@example.com"
        new_token = notifier.last_token
        assert new_token != old_token

        stale = await engine.verify_email(old_token)
        assert stale.success is False
        assert stale.kind == ErrorKind.INVALID_TOKEN

        fresh = await engine.verify_email(new_token)
        assert fresh.success is True

    @pytest.mark.asyncio
    async def test_unknown_email(self, unit_env: AsyncContainer):
        engine = await unit_env.get(RegistrationEngine)

        result = await engine.resend_verification_email("nobody@example.com")

        assert isinstance(result, OperationFailure)
        assert result.kind == ErrorKind.ACCOUNT_NOT_FOUND
        assert result.message == "No account found with this email"

    @pytest.mark.asyncio
    async def test_already_verified(self, unit_env: AsyncContainer):
        engine = await unit_env.get(RegistrationEngine)
        notifier = await unit_env.get(EmailNotifier)
        await engine.register_with_email("jo@example.com", VALID_PASSWORD, "Jo", "Do")
        await engine.verify_email(notifier.last_token)

        result = await engine.resend_verification_email("jo@example.com")

        assert result.kind == ErrorKind.INVALID_STATE
        assert result.message == "Email is already verified"

    @pytest.mark.asyncio
    async def test_oauth_account(self, unit_env: AsyncContainer):
        """OAuth accounts are verified, so resend reports the verified state."""
        engine = await unit_env.get(RegistrationEngine)
        await engine.register_with_oauth(
            email="sam@gmail.com",
            first_name="Sam",
            last_name="Lee",
            provider=OAuthProvider.GOOGLE,
            provider_id="g-1",
            access_token=None,
        )

        result = await engine.resend_verification_email("sam@gmail.com")

        assert result.kind == ErrorKind.INVALID_STATE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", ["", None])
    async def test_email_required(self, unit_env: AsyncContainer, email):
        engine = await unit_env.get(RegistrationEngine)

        result = await engine.resend_verification_email(email)

        assert result.kind == ErrorKind.VALIDATION_ERROR
        assert result.errors == ["Email is required"]

    @pytest.mark.asyncio
    async def test_send_failure_still_rotates(self, unit_env: AsyncContainer):
        """The stored hash changes even when the new email cannot be sent."""
        engine = await unit_env.get(RegistrationEngine)
        repository = await unit_env.get(IdentityRepository)
        notifier = await unit_env.get(EmailNotifier)
        await engine.register_with_email("jo@example.com", VALID_PASSWORD, "Jo", "Do")
        before = await repository.find_by_normalized_email("jo@example.com")
        notifier.fail_verification = True

        result = await engine.resend_verification_email("jo@example.com")

        assert result.kind == ErrorKind.NOTIFICATION_FAILURE
        after = await repository.find_by_normalized_email("jo@example.com")
        assert after.verification_token_hash != before.verification_token_hash
        assert after.created_at == before.created_at
