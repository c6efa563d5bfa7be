"""
Domain exceptions.
Raised by the service layer and translated to HTTP errors by the routers.
"""

from typing import Optional


class GreenCartError(Exception):
    """Base class for all application errors."""


class InsufficientDataError(GreenCartError):
    """A simulation cannot run: no drivers, routes or orders to work with."""

    def __init__(self, num_drivers: int, num_routes: int, num_orders: int):
        self.num_drivers = num_drivers
        self.num_routes = num_routes
        self.num_orders = num_orders
        super().__init__("Insufficient data to run simulation.")


class StorageFailureError(GreenCartError):
    """The database could not read or write what was asked of it."""

    def __init__(self, operation: str, cause: Optional[Exception] = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Storage failure during {operation}")


class SimulationNotFoundError(GreenCartError):
    """Requested simulation result does not exist."""

    def __init__(self, simulation_id):
        self.simulation_id = simulation_id
        super().__init__(f"Simulation {simulation_id} not found")


class RecordNotFoundError(GreenCartError):
    """A driver, route or order with the given id does not exist."""

    def __init__(self, kind: str, record_id):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found")


class RecordConflictError(GreenCartError):
    """A business key (routeId / orderId) is already taken."""

    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"{field} {value} already exists")


class UnknownRouteError(GreenCartError):
    """An order references a routeId that has no route."""

    def __init__(self, route_id: int):
        self.route_id = route_id
        super().__init__(f"routeId {route_id} does not exist")
