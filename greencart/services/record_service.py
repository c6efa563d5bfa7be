"""
Master record service layer.
CRUD for drivers, routes and orders, with the business-key checks the
simulation relies on (unique routeId/orderId, orders pointing at real routes).
"""

from typing import List, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from greencart.core.exceptions import (
    RecordConflictError,
    RecordNotFoundError,
    UnknownRouteError,
)
from greencart.database import Base
from greencart.models import Driver, Route, Order
from greencart.schemas.driver import DriverInput
from greencart.schemas.route import RouteInput
from greencart.schemas.order import OrderInput

ModelT = TypeVar("ModelT", bound=Base)


async def _get_or_raise(db: AsyncSession, model: Type[ModelT], record_id: UUID) -> ModelT:
    record = await db.get(model, record_id)
    if record is None:
        raise RecordNotFoundError(model.__name__, record_id)
    return record


async def _list_in_roster_order(db: AsyncSession, model: Type[ModelT]) -> List[ModelT]:
    # Insertion order matters: drivers are assigned round-robin in this order
    result = await db.execute(select(model).order_by(model.created_at, model.id))
    return list(result.scalars().all())


def _apply(record: Base, data) -> None:
    for key, value in data.model_dump().items():
        setattr(record, key, value)


async def _flush_unique(db: AsyncSession, field: str, value: int) -> None:
    # A concurrent writer can take the key between the lookup and the insert
    try:
        await db.flush()
    except IntegrityError as e:
        raise RecordConflictError(field, value) from e


# =============================================================================
# Drivers
# =============================================================================

async def list_drivers(db: AsyncSession) -> List[Driver]:
    return await _list_in_roster_order(db, Driver)


async def create_driver(db: AsyncSession, data: DriverInput) -> Driver:
    driver = Driver()
    _apply(driver, data)
    db.add(driver)
    await db.flush()
    await db.refresh(driver)
    return driver


async def update_driver(db: AsyncSession, driver_id: UUID, data: DriverInput) -> Driver:
    driver = await _get_or_raise(db, Driver, driver_id)
    _apply(driver, data)
    await db.flush()
    await db.refresh(driver)
    return driver


async def delete_driver(db: AsyncSession, driver_id: UUID) -> None:
    driver = await _get_or_raise(db, Driver, driver_id)
    await db.delete(driver)
    await db.flush()


# =============================================================================
# Routes
# =============================================================================

async def get_route_by_route_id(db: AsyncSession, route_id: int) -> Optional[Route]:
    result = await db.execute(select(Route).where(Route.route_id == route_id))
    return result.scalar_one_or_none()


async def list_routes(db: AsyncSession) -> List[Route]:
    return await _list_in_roster_order(db, Route)


async def create_route(db: AsyncSession, data: RouteInput) -> Route:
    if await get_route_by_route_id(db, data.route_id) is not None:
        raise RecordConflictError("routeId", data.route_id)

    route = Route()
    _apply(route, data)
    db.add(route)
    await _flush_unique(db, "routeId", data.route_id)
    await db.refresh(route)
    return route


async def update_route(db: AsyncSession, record_id: UUID, data: RouteInput) -> Route:
    route = await _get_or_raise(db, Route, record_id)

    existing = await get_route_by_route_id(db, data.route_id)
    if existing is not None and existing.id != route.id:
        raise RecordConflictError("routeId", data.route_id)

    _apply(route, data)
    await _flush_unique(db, "routeId", data.route_id)
    await db.refresh(route)
    return route


async def delete_route(db: AsyncSession, record_id: UUID) -> None:
    route = await _get_or_raise(db, Route, record_id)
    await db.delete(route)
    await db.flush()


# =============================================================================
# Orders
# =============================================================================

async def _get_order_by_order_id(db: AsyncSession, order_id: int) -> Optional[Order]:
    result = await db.execute(select(Order).where(Order.order_id == order_id))
    return result.scalar_one_or_none()


async def _ensure_route_exists(db: AsyncSession, route_id: int) -> None:
    if await get_route_by_route_id(db, route_id) is None:
        raise UnknownRouteError(route_id)


async def list_orders(db: AsyncSession) -> List[Order]:
    return await _list_in_roster_order(db, Order)


async def create_order(db: AsyncSession, data: OrderInput) -> Order:
    await _ensure_route_exists(db, data.route_id)
    if await _get_order_by_order_id(db, data.order_id) is not None:
        raise RecordConflictError("orderId", data.order_id)

    order = Order()
    _apply(order, data)
    db.add(order)
    await _flush_unique(db, "orderId", data.order_id)
    await db.refresh(order)
    return order


async def update_order(db: AsyncSession, record_id: UUID, data: OrderInput) -> Order:
    order = await _get_or_raise(db, Order, record_id)
    await _ensure_route_exists(db, data.route_id)

    existing = await _get_order_by_order_id(db, data.order_id)
    if existing is not None and existing.id != order.id:
        raise RecordConflictError("orderId", data.order_id)

    _apply(order, data)
    await _flush_unique(db, "orderId", data.order_id)
    await db.refresh(order)
    return order


async def delete_order(db: AsyncSession, record_id: UUID) -> None:
    order = await _get_or_raise(db, Order, record_id)
    await db.delete(order)
    await db.flush()
