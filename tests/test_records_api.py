"""
API tests for driver, route and order management.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from greencart.services import record_service
from tests.fixtures.test_data import generate_drivers, generate_orders, generate_routes

API = "/api/v1"


class TestDriversApi:

    async def test_create_and_list(self, client):
        payload = {"name": "Asha", "currentShiftHours": 2, "past7DayHours": [6, 7, 8, 6, 7, 8, 9]}

        created = await client.post(f"{API}/drivers", json=payload)
        assert created.status_code == 201
        body = created.json()
        assert body["name"] == "Asha"
        assert body["past7DayHours"] == [6, 7, 8, 6, 7, 8, 9]
        assert "id" in body and "createdAt" in body

        listed = await client.get(f"{API}/drivers")
        assert listed.status_code == 200
        assert [d["name"] for d in listed.json()] == ["Asha"]

    async def test_list_keeps_creation_order(self, client):
        for driver in generate_drivers(count=4):
            response = await client.post(f"{API}/drivers", json=driver)
            assert response.status_code == 201
        names = [d["name"] for d in (await client.get(f"{API}/drivers")).json()]
        assert len(names) == 4

    @pytest.mark.parametrize("history", [[8, 8, 8, 8, 8, 8], [8] * 8, [8, 8, 8, -1, 8, 8, 8]])
    async def test_rejects_bad_history(self, client, history):
        response = await client.post(
            f"{API}/drivers",
            json={"name": "X", "currentShiftHours": 0, "past7DayHours": history},
        )
        assert response.status_code == 422

    async def test_rejects_empty_name(self, client):
        response = await client.post(
            f"{API}/drivers",
            json={"name": "", "currentShiftHours": 0, "past7DayHours": [1] * 7},
        )
        assert response.status_code == 422

    async def test_update_and_delete(self, client):
        created = (await client.post(f"{API}/drivers", json=generate_drivers(count=1)[0])).json()

        updated = await client.put(
            f"{API}/drivers/{created['id']}",
            json={"name": "Renamed", "currentShiftHours": 4, "past7DayHours": [9] * 7},
        )
        assert updated.status_code == 200
        assert updated.json()["name"] == "Renamed"
        assert updated.json()["currentShiftHours"] == 4

        deleted = await client.delete(f"{API}/drivers/{created['id']}")
        assert deleted.status_code == 200
        assert (await client.get(f"{API}/drivers")).json() == []

    async def test_unknown_driver(self, client):
        payload = {"name": "X", "currentShiftHours": 0, "past7DayHours": [1] * 7}
        assert (await client.put(f"{API}/drivers/{uuid4()}", json=payload)).status_code == 404
        assert (await client.delete(f"{API}/drivers/{uuid4()}")).status_code == 404


class TestRoutesApi:

    async def test_create_route(self, client):
        response = await client.post(
            f"{API}/routes",
            json={"routeId": 7, "distanceKm": 8, "trafficLevel": "Medium", "baseTimeMin": 24},
        )
        assert response.status_code == 201
        assert response.json()["trafficLevel"] == "Medium"
        assert response.json()["routeId"] == 7

    async def test_duplicate_route_id(self, client):
        route = generate_routes(count=1)[0]
        assert (await client.post(f"{API}/routes", json=route)).status_code == 201

        response = await client.post(f"{API}/routes", json=route)
        assert response.status_code == 409

    async def test_concurrent_duplicate_is_conflict(self, client, monkeypatch):
        route = generate_routes(count=1)[0]
        assert (await client.post(f"{API}/routes", json=route)).status_code == 201

        # Second writer passed the lookup before the first one inserted
        monkeypatch.setattr(record_service, "get_route_by_route_id", AsyncMock(return_value=None))
        response = await client.post(f"{API}/routes", json=route)

        assert response.status_code == 409
        assert response.json()["detail"] == f"routeId {route['routeId']} already exists"

    @pytest.mark.parametrize("field,value", [
        ("trafficLevel", "Gridlock"),
        ("distanceKm", 0),
        ("baseTimeMin", -5),
        ("routeId", 0),
    ])
    async def test_invalid_route(self, client, field, value):
        payload = {"routeId": 1, "distanceKm": 5, "trafficLevel": "Low", "baseTimeMin": 15}
        payload[field] = value
        assert (await client.post(f"{API}/routes", json=payload)).status_code == 422

    async def test_update_to_taken_route_id(self, client):
        first, second = generate_routes(count=2)
        await client.post(f"{API}/routes", json=first)
        created = (await client.post(f"{API}/routes", json=second)).json()

        response = await client.put(f"{API}/routes/{created['id']}", json={**second, "routeId": first["routeId"]})
        assert response.status_code == 409

    async def test_update_keeps_own_route_id(self, client):
        route = generate_routes(count=1)[0]
        created = (await client.post(f"{API}/routes", json=route)).json()

        response = await client.put(f"{API}/routes/{created['id']}", json={**route, "trafficLevel": "High"})
        assert response.status_code == 200
        assert response.json()["trafficLevel"] == "High"

    async def test_delete_route(self, client):
        created = (await client.post(f"{API}/routes", json=generate_routes(count=1)[0])).json()
        assert (await client.delete(f"{API}/routes/{created['id']}")).status_code == 200
        assert (await client.delete(f"{API}/routes/{created['id']}")).status_code == 404


class TestOrdersApi:

    @pytest.fixture
    async def routes(self, client):
        for route in generate_routes(count=2):
            await client.post(f"{API}/routes", json=route)

    async def test_create_order(self, client, routes):
        order = generate_orders(count=1, route_ids=[2])[0]
        response = await client.post(f"{API}/orders", json=order)

        assert response.status_code == 201
        assert response.json()["routeId"] == 2
        assert response.json()["orderId"] == order["orderId"]

    async def test_unknown_route_rejected(self, client, routes):
        order = generate_orders(count=1, route_ids=[99])[0]
        response = await client.post(f"{API}/orders", json=order)

        assert response.status_code == 400
        assert "99" in response.json()["detail"]

    async def test_duplicate_order_id(self, client, routes):
        order = generate_orders(count=1, route_ids=[1])[0]
        await client.post(f"{API}/orders", json=order)

        assert (await client.post(f"{API}/orders", json=order)).status_code == 409

    @pytest.mark.parametrize("delivery_time", ["24:00", "7:30", "12:5", "noon"])
    async def test_invalid_delivery_time(self, client, routes, delivery_time):
        order = {"orderId": 1, "valueRs": 100, "routeId": 1, "deliveryTime": delivery_time}
        assert (await client.post(f"{API}/orders", json=order)).status_code == 422

    async def test_negative_value(self, client, routes):
        order = {"orderId": 1, "valueRs": -1, "routeId": 1, "deliveryTime": "01:00"}
        assert (await client.post(f"{API}/orders", json=order)).status_code == 422

    async def test_update_order_route(self, client, routes):
        order = generate_orders(count=1, route_ids=[1])[0]
        created = (await client.post(f"{API}/orders", json=order)).json()

        moved = await client.put(f"{API}/orders/{created['id']}", json={**order, "routeId": 2})
        assert moved.status_code == 200
        assert moved.json()["routeId"] == 2

        broken = await client.put(f"{API}/orders/{created['id']}", json={**order, "routeId": 50})
        assert broken.status_code == 400

    async def test_list_and_delete(self, client, routes):
        for order in generate_orders(count=3, route_ids=[1, 2]):
            await client.post(f"{API}/orders", json=order)

        listed = (await client.get(f"{API}/orders")).json()
        assert [o["orderId"] for o in listed] == [1, 2, 3]

        assert (await client.delete(f"{API}/orders/{listed[0]['id']}")).status_code == 200
        assert len((await client.get(f"{API}/orders")).json()) == 2
