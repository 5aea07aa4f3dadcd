"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for immutability and wire aliases: the
    backend speaks camelCase JSON, the domain uses snake_case attributes.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        alias_generator=to_camel,
        populate_by_name=True,
    )
