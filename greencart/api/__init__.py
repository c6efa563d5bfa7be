"""API routers package initialization."""

from greencart.api.drivers import router as drivers_router
from greencart.api.routes import router as routes_router
from greencart.api.orders import router as orders_router
from greencart.api.simulations import router as simulations_router

__all__ = [
    "drivers_router",
    "routes_router",
    "orders_router",
    "simulations_router",
]
