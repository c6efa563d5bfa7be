"""Models package initialization - imports all models for easy access."""

from greencart.models.driver import Driver
from greencart.models.route import Route, TrafficLevel
from greencart.models.order import Order
from greencart.models.simulation_result import SimulationResult

__all__ = [
    "Driver",
    "Route",
    "TrafficLevel",
    "Order",
    "SimulationResult",
]
