"""Schemas package initialization."""

from greencart.schemas.driver import DriverInput, DriverResponse
from greencart.schemas.route import RouteInput, RouteResponse
from greencart.schemas.order import OrderInput, OrderResponse
from greencart.schemas.simulation import (
    SimulationRequest,
    SimulationInputs,
    FuelCostBreakdownSchema,
    SimulationKPIsSchema,
    SimulationAssignmentSchema,
    SimulationReportResponse,
)

__all__ = [
    "DriverInput",
    "DriverResponse",
    "RouteInput",
    "RouteResponse",
    "OrderInput",
    "OrderResponse",
    "SimulationRequest",
    "SimulationInputs",
    "FuelCostBreakdownSchema",
    "SimulationKPIsSchema",
    "SimulationAssignmentSchema",
    "SimulationReportResponse",
]
