"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure that tests can swap for in-process doubles:
# OAuth clients, the identity store and the email notifier
Component = Literal["oauth", "persistence", "email"]


class ProviderBase(Provider):
    """Base for all DI providers.

    A provider that declares `__mock_component__` is the base of a mockable
    component; its subclasses are the production and mock implementations,
    told apart by `__is_mock__`.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
