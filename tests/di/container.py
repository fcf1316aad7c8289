"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container

from enroll.util.di import PROVIDERS, Component, get_provider


def mockable_components() -> set[str]:
    """Components that have a mock implementation registered."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ and base.__subclasses__()
    }


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container where every component is mocked unless unmocked.

    Settings come from the environment defaults in tests/conftest.py.

    Args:
        unmock: Components to build with their production implementation

    Returns:
        Configured test container

    Raises:
        ValueError: If an unknown component is requested

    Examples:
        # Unit tests: in-memory store, mock OAuth, recording notifier
        container = build_test_container()

        # Integration tests: real PostgreSQL
        container = build_test_container(unmock={"persistence"})
    """
    unmock = set(unmock or ())
    unknown = unmock - mockable_components()
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

    providers = []
    for base in PROVIDERS:
        component = base.__mock_component__
        use_mock = component is not None and component not in unmock
        providers.append(get_provider(base, use_mock=use_mock)())

    return make_async_container(*providers)
