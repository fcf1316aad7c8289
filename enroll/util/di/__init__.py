"""Dependency injection module."""

from typing import Type

from enroll.util.di.application import ProdApplicationProvider
from enroll.util.di.base import Component, ProviderBase
from enroll.util.di.core import ProdConfigProvider
from enroll.util.di.domain import ProdDomainProvider
from enroll.util.di.infrastructure import (
    EmailProvider,
    OAuthClientProvider,
    PersistenceProvider,
    ProdEmailProvider,
    ProdOAuthClientProvider,
    ProdPersistenceProvider,
)

# Concrete providers are used as-is; component bases are resolved to their
# production or mock subclass by get_provider
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    OAuthClientProvider,
    PersistenceProvider,
    EmailProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for an entry of PROVIDERS.

    Mock subclasses only exist once tests/di has been imported, so the
    production container never sees them.

    Args:
        base: Entry from PROVIDERS
        use_mock: Whether to pick the mock implementation of a component

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if getattr(impl, "__is_mock__", False) == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(
        f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
    )


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "EmailProvider",
    "OAuthClientProvider",
    "PersistenceProvider",
    "ProdEmailProvider",
    "ProdOAuthClientProvider",
    "ProdPersistenceProvider",
]
