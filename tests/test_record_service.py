"""
Tests for the master record service layer.
Business keys stay unique even when a concurrent writer slips past the lookup.
"""

from unittest.mock import AsyncMock

import pytest

from greencart.core.exceptions import RecordConflictError, UnknownRouteError
from greencart.models import TrafficLevel
from greencart.schemas.order import OrderInput
from greencart.schemas.route import RouteInput
from greencart.services import record_service


def route_input(route_id=1):
    return RouteInput(
        route_id=route_id,
        distance_km=5,
        traffic_level=TrafficLevel.LOW,
        base_time_min=15,
    )


class TestUniqueBusinessKeys:

    async def test_duplicate_route_found_by_lookup(self, db_session, sample_routes):
        with pytest.raises(RecordConflictError):
            await record_service.create_route(db_session, route_input(route_id=1))

    async def test_route_insert_race_is_a_conflict(self, db_session, sample_routes, monkeypatch):
        # Lookup misses, as it would when another request inserts in between
        monkeypatch.setattr(record_service, "get_route_by_route_id", AsyncMock(return_value=None))

        with pytest.raises(RecordConflictError) as exc_info:
            await record_service.create_route(db_session, route_input(route_id=1))

        assert str(exc_info.value) == "routeId 1 already exists"

    async def test_order_insert_race_is_a_conflict(self, db_session, sample_orders, monkeypatch):
        monkeypatch.setattr(record_service, "_get_order_by_order_id", AsyncMock(return_value=None))
        order = OrderInput(order_id=101, value_rs=10, route_id=2, delivery_time="01:00")

        with pytest.raises(RecordConflictError) as exc_info:
            await record_service.create_order(db_session, order)

        assert str(exc_info.value) == "orderId 101 already exists"

    async def test_route_update_race_is_a_conflict(self, db_session, sample_routes, monkeypatch):
        monkeypatch.setattr(record_service, "get_route_by_route_id", AsyncMock(return_value=None))

        with pytest.raises(RecordConflictError):
            await record_service.update_route(db_session, sample_routes[1].id, route_input(route_id=1))


class TestOrderRouteReference:

    async def test_unknown_route(self, db_session, sample_routes):
        order = OrderInput(order_id=1, value_rs=10, route_id=77, delivery_time="01:00")

        with pytest.raises(UnknownRouteError):
            await record_service.create_order(db_session, order)

    async def test_orders_listed_in_insertion_order(self, db_session, sample_orders):
        orders = await record_service.list_orders(db_session)
        assert [o.order_id for o in orders] == [101, 102, 103, 104, 105, 106]
