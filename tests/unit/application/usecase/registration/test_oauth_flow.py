"""Unit tests for the begin/complete OAuth registration use cases."""

import pytest
from dishka import AsyncContainer

from enroll.adapter.error import ProviderError
from enroll.adapter.oauth import MockOAuthClient
from enroll.application.usecase.registration import (
    BeginOAuthRegistrationRequest,
    BeginOAuthRegistrationUseCase,
    CompleteOAuthRegistrationRequest,
    CompleteOAuthRegistrationUseCase,
    RegisterWithOAuthUseCase,
    RegistrationEngine,
)
from enroll.domain.repository import IdentityRepository
from enroll.domain.service import OAuthClient, PkceExchange
from enroll.domain.value import (
    AuthorizationRequest,
    ErrorKind,
    OAuthProvider,
    OperationFailure,
    ProviderProfile,
    RegistrationReceipt,
)
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class FailingProfileClient(MockOAuthClient):
    async def fetch_user_info(self, access_token: str) -> ProviderProfile:
        raise ProviderError("User info request failed: 503")


class TestOAuthRegistrationFlow:
    """Tests for the full authorization-code flow."""

    @pytest.mark.asyncio
    async def test_begin_then_complete(self, unit_env: AsyncContainer):
        """Callback with the issued state should enroll the provider profile."""
        # Arrange
        engine = await unit_env.get(RegistrationEngine)
        repository = await unit_env.get(IdentityRepository)

        # Act
        authorization = await engine.begin_oauth_registration(OAuthProvider.GOOGLE)
        result = await engine.complete_oauth_registration(
            OAuthProvider.GOOGLE, "auth-code", authorization.state
        )

        # Assert
        assert isinstance(authorization, AuthorizationRequest)
        assert len(authorization.state) >= 43
        assert isinstance(result, RegistrationReceipt)
        assert result.email == "mock@google.example.com"
        assert result.provider == "google"

        record = await repository.find_by_oauth_identity(
            OAuthProvider.GOOGLE, "mock-google-123"
        )
        assert record.email_verified is True
        assert record.oauth_token_encrypted is not None

    @pytest.mark.asyncio
    async def test_states_are_unique(self, unit_env: AsyncContainer):
        engine = await unit_env.get(RegistrationEngine)

        first = await engine.begin_oauth_registration(OAuthProvider.AMAZON)
        second = await engine.begin_oauth_registration(OAuthProvider.AMAZON)

        assert first.state != second.state

    @pytest.mark.asyncio
    async def test_replayed_callback_is_rejected(self, unit_env: AsyncContainer):
        """The same state can only complete one registration."""
        engine = await unit_env.get(RegistrationEngine)
        authorization = await engine.begin_oauth_registration(OAuthProvider.GOOGLE)
        await engine.complete_oauth_registration(
            OAuthProvider.GOOGLE, "auth-code", authorization.state
        )

        replay = await engine.complete_oauth_registration(
            OAuthProvider.GOOGLE, "auth-code", authorization.state
        )

        assert isinstance(replay, OperationFailure)
        assert replay.kind == ErrorKind.INVALID_OAUTH_STATE

    @pytest.mark.asyncio
    async def test_unknown_state_is_rejected(self, unit_env: AsyncContainer):
        engine = await unit_env.get(RegistrationEngine)

        result = await engine.complete_oauth_registration(
            OAuthProvider.AMAZON, "auth-code", "forged-state"
        )

        assert result.kind == ErrorKind.INVALID_OAUTH_STATE

    @pytest.mark.asyncio
    async def test_state_is_bound_to_provider(self, unit_env: AsyncContainer):
        engine = await unit_env.get(RegistrationEngine)
        authorization = await engine.begin_oauth_registration(OAuthProvider.GOOGLE)

        result = await engine.complete_oauth_registration(
            OAuthProvider.AMAZON, "auth-code", authorization.state
        )

        assert result.kind == ErrorKind.INVALID_OAUTH_STATE

    @pytest.mark.asyncio
    async def test_provider_failure(self, unit_env: AsyncContainer):
        # Arrange
        client = FailingProfileClient(OAuthProvider.GOOGLE)
        exchange = PkceExchange({OAuthProvider.GOOGLE: client})
        begin = BeginOAuthRegistrationUseCase(pkce_exchange=exchange)
        complete = CompleteOAuthRegistrationUseCase(
            pkce_exchange=exchange,
            register_with_oauth=await unit_env.get(RegisterWithOAuthUseCase),
        )

        # Act
        authorization = await begin.execute(
            BeginOAuthRegistrationRequest(provider=OAuthProvider.GOOGLE)
        )
        result = await complete.execute(
            CompleteOAuthRegistrationRequest(
                provider=OAuthProvider.GOOGLE,
                code="auth-code",
                state=authorization.state,
            )
        )

        # Assert
        assert result.kind == ErrorKind.PROVIDER_ERROR
        assert result.message == "User info request failed: 503"

    @pytest.mark.asyncio
    async def test_unconfigured_provider(self, unit_env: AsyncContainer):
        clients = await unit_env.get(dict[OAuthProvider, OAuthClient])
        begin = BeginOAuthRegistrationUseCase(
            pkce_exchange=PkceExchange(
                {OAuthProvider.GOOGLE: clients[OAuthProvider.GOOGLE]}
            )
        )

        result = await begin.execute(
            BeginOAuthRegistrationRequest(provider=OAuthProvider.AMAZON)
        )

        assert result.kind == ErrorKind.INVALID_INPUT
