"""
Shared pydantic configuration.
Public JSON uses camelCase field names; Python code uses snake_case.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

TIME_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"


class CamelModel(BaseModel):
    """Base model serialising to camelCase and accepting either spelling."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
