"""Base Pydantic model configuration for printscout models.

All printscout models inherit from PrintScoutBaseModel to ensure consistent
behavior:
- Immutability (frozen=True) so registry records can be handed to listeners
- Strict validation (extra="forbid") to catch typos and invalid fields
- Flexible field naming (populate_by_name=True) for the persisted aliases
"""

from pydantic import BaseModel, ConfigDict


class PrintScoutBaseModel(BaseModel):
    """Base model for all printscout entities.

    Example:
        >>> class MyModel(PrintScoutBaseModel):
        ...     name: str
        >>> obj = MyModel(name="test")
        >>> obj.name = "other"  # Raises ValidationError (frozen)
        Traceback (most recent call last):
        ...
        pydantic_core._pydantic_core.ValidationError: ...
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        validate_default=True,
        json_schema_extra={
            "additionalProperties": False,
        },
    )
