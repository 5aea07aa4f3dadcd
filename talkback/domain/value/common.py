"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ValueObject(BaseModel):
    """Base class for all value objects.

    Value objects are immutable and compared by value, not identity.
    Field names are snake_case in Python and camelCase on the wire; both
    spellings are accepted on input.
    """

    model_config = ConfigDict(
        frozen=True,  # All value objects are immutable
        alias_generator=to_camel,
        populate_by_name=True,
    )
