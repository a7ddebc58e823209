"""
Base schema for all models.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)
        - Enum members serialized by value

    Strings are not auto-trimmed: inputs are echoed back exactly as sanitized
    by the normalizer.
    """
    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        use_enum_values=True
    )
