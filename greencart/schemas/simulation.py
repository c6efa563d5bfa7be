"""
Pydantic schemas for the simulation API.
Field names and nesting of the report are consumed by the dashboard and
by anything reading simulation history, so keep them stable.
"""

from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import Field

from greencart.schemas.common import CamelModel, TIME_PATTERN


class SimulationRequest(CamelModel):
    """Request schema for POST /simulate."""
    drivers_available: int = Field(..., gt=0, description="Number of drivers taking part")
    start_time: str = Field(..., pattern=TIME_PATTERN, description="Shift start HH:MM")
    max_hours_per_driver: float = Field(..., gt=0, description="Hour cap per driver")

    model_config = {
        "json_schema_extra": {
            "example": {
                "driversAvailable": 3,
                "startTime": "09:00",
                "maxHoursPerDriver": 8,
            }
        }
    }


class SimulationInputs(CamelModel):
    drivers_available: int
    start_time: str
    max_hours_per_driver: float


class FuelCostBreakdownSchema(CamelModel):
    base_fuel: float
    high_traffic_surcharge: float


class SimulationKPIsSchema(CamelModel):
    """Run-level KPIs."""
    total_profit: float
    efficiency: int = Field(..., ge=0, le=100, description="On-time percentage")
    on_time: int
    late: int
    fuel_cost_breakdown: FuelCostBreakdownSchema


class SimulationAssignmentSchema(CamelModel):
    """Outcome for one order."""
    order_id: int
    driver_name: str
    route_id: int
    on_time: bool
    profit_for_order: float


class SimulationReportResponse(CamelModel):
    """A persisted simulation report."""
    id: UUID
    created_at: datetime
    inputs: SimulationInputs
    kpis: SimulationKPIsSchema
    assignments: List[SimulationAssignmentSchema]
    skipped_orders: int = Field(0, description="Orders ignored because their route was missing")
