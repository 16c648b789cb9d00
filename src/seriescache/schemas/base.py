"""Base Pydantic model with strict defaults for seriescache configs.

All seriescache config schemas inherit from this base to ensure consistent
validation behavior across defaults, series options, and compiled policies.
"""

from pydantic import BaseModel, ConfigDict


class SeriesCacheBaseModel(BaseModel):
    """Base model for all seriescache configuration schemas.

    Enforces strict validation:
    - No extra fields allowed
    - Validates assignments after initialization
    - Arbitrary callables are allowed as field values (validators, sorters)
    """

    model_config = ConfigDict(
        extra='forbid',               # Reject unknown fields
        validate_assignment=True,     # Validate on field mutation
        use_enum_values=True,         # Convert enums to values
        arbitrary_types_allowed=True, # Callables and validator objects
    )
