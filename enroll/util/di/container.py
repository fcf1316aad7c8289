"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from enroll.adapter.crypto import AeadCipher
from enroll.domain.service import OAuthClient
from enroll.domain.value import OAuthProvider
from enroll.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically.

    Returns:
        Configured DI container with production providers
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)


async def check_configuration(container: AsyncContainer) -> None:
    """Resolve the components that validate configuration on construction.

    Call once at startup so a missing key or OAuth credential stops the
    process instead of failing the first request that needs it.

    Raises:
        ConfigurationError: If encryption or OAuth settings are unusable
    """
    await container.get(AeadCipher)
    await container.get(dict[OAuthProvider, OAuthClient])
