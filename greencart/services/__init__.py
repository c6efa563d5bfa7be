"""Services package initialization."""

from greencart.services.simulation_engine import (
    DriverSnapshot,
    RouteSnapshot,
    OrderSnapshot,
    RunParameters,
    SimulationRules,
    SimulationReport,
    run_simulation,
)

__all__ = [
    "DriverSnapshot",
    "RouteSnapshot",
    "OrderSnapshot",
    "RunParameters",
    "SimulationRules",
    "SimulationReport",
    "run_simulation",
]
