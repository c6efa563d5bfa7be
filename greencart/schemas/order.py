"""
Pydantic schemas for the orders API.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from greencart.schemas.common import CamelModel, TIME_PATTERN


class OrderInput(CamelModel):
    """Create/update payload for an order."""
    order_id: int = Field(..., gt=0, description="Business key of the order")
    value_rs: float = Field(..., ge=0, description="Order value in rupees")
    route_id: int = Field(..., gt=0, description="routeId of an existing route")
    delivery_time: str = Field(..., pattern=TIME_PATTERN, description="Nominal delivery time HH:MM")

    model_config = {
        "json_schema_extra": {
            "example": {
                "orderId": 1,
                "valueRs": 2594,
                "routeId": 7,
                "deliveryTime": "02:07",
            }
        }
    }


class OrderResponse(CamelModel):
    """Order as returned by the API."""
    id: UUID
    order_id: int
    value_rs: float
    route_id: int
    delivery_time: str
    created_at: datetime
    updated_at: datetime
