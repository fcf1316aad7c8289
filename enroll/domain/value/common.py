"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Base class for results, profiles and other value objects.

    Frozen and compared field by field, so results can be matched with
    `match`/`case` class patterns and compared directly in tests.
    """

    model_config = ConfigDict(frozen=True)
