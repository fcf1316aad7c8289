"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for domain entities.

    Entities are frozen; state transitions such as verification return a
    new instance that the caller persists.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,  # UserId wraps a plain UUID
    )
