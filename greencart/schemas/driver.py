"""
Pydantic schemas for the drivers API.
"""

from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import Field, NonNegativeFloat

from greencart.schemas.common import CamelModel


class DriverInput(CamelModel):
    """Create/update payload for a driver."""
    name: str = Field(..., min_length=1, description="Driver name")
    current_shift_hours: float = Field(0.0, ge=0, description="Hours worked in the current shift")
    past_7_day_hours: List[NonNegativeFloat] = Field(
        ...,
        alias="past7DayHours",
        min_length=7,
        max_length=7,
        description="Hours worked on each of the last 7 days, oldest first",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Amit",
                "currentShiftHours": 0,
                "past7DayHours": [8, 7, 6, 7, 8, 5, 4],
            }
        }
    }


class DriverResponse(CamelModel):
    """Driver as returned by the API."""
    id: UUID
    name: str
    current_shift_hours: float
    past_7_day_hours: List[float] = Field(..., alias="past7DayHours")
    created_at: datetime
    updated_at: datetime
