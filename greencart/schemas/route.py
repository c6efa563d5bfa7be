"""
Pydantic schemas for the routes API.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from greencart.models.route import TrafficLevel
from greencart.schemas.common import CamelModel


class RouteInput(CamelModel):
    """Create/update payload for a route."""
    route_id: int = Field(..., gt=0, description="Business key referenced by orders")
    distance_km: float = Field(..., gt=0, description="Route length in km")
    traffic_level: TrafficLevel = Field(..., description="Low, Medium or High")
    base_time_min: float = Field(..., gt=0, description="Nominal delivery time in minutes")

    model_config = {
        "json_schema_extra": {
            "example": {
                "routeId": 1,
                "distanceKm": 12,
                "trafficLevel": "High",
                "baseTimeMin": 45,
            }
        }
    }


class RouteResponse(CamelModel):
    """Route as returned by the API."""
    id: UUID
    route_id: int
    distance_km: float
    traffic_level: TrafficLevel
    base_time_min: float
    created_at: datetime
    updated_at: datetime
