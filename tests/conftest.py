import os

# Keep the module-level engine off PostgreSQL while the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DEBUG", "false")

from datetime import datetime, timedelta
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from greencart.database import Base, get_db
from greencart.main import app
from greencart.models import Driver, Route, Order, TrafficLevel

TEST_DB_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest.fixture
async def test_engine():
    """Fresh test database engine per test."""
    engine = create_async_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False} if "sqlite" in TEST_DB_URL else {},
        poolclass=StaticPool if "sqlite" in TEST_DB_URL else None,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Function-scoped DB session inside a transaction that is rolled back."""
    connection = await test_engine.connect()
    transaction = await connection.begin()

    session_maker = async_sessionmaker(
        bind=connection,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    session = session_maker()

    yield session

    await session.close()
    if transaction.is_active:
        await transaction.rollback()
    await connection.close()


@pytest.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """Test client with override for get_db."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def _stamp(offset: int) -> datetime:
    # Distinct created_at values keep roster order deterministic
    return datetime(2026, 1, 1, 8, 0) + timedelta(seconds=offset)


@pytest.fixture
async def sample_routes(db_session):
    """Three routes: a short Low, a medium Medium and a long High traffic route."""
    specs = [
        (1, 10.0, TrafficLevel.LOW, 30.0),
        (2, 15.0, TrafficLevel.MEDIUM, 45.0),
        (3, 20.0, TrafficLevel.HIGH, 60.0),
    ]
    routes = []
    for i, (route_id, km, traffic, minutes) in enumerate(specs):
        route = Route(
            route_id=route_id,
            distance_km=km,
            traffic_level=traffic,
            base_time_min=minutes,
            created_at=_stamp(i),
        )
        db_session.add(route)
        routes.append(route)

    await db_session.commit()
    return routes


@pytest.fixture
async def sample_drivers(db_session):
    """Two rested drivers followed by one fatigued driver."""
    specs = [
        ("Asha", [6, 7, 8, 6, 7, 8, 6]),
        ("Bala", [8, 8, 8, 8, 8, 8, 8]),
        ("Chitra", [9, 9, 9, 9, 9, 9, 10]),
    ]
    drivers = []
    for i, (name, history) in enumerate(specs):
        driver = Driver(
            name=name,
            current_shift_hours=0.0,
            past_7_day_hours=history,
            created_at=_stamp(i),
        )
        db_session.add(driver)
        drivers.append(driver)

    await db_session.commit()
    return drivers


@pytest.fixture
async def sample_orders(db_session, sample_routes):
    """Six orders cycling over the sample routes."""
    specs = [
        (101, 500.0, 1),
        (102, 1500.0, 2),
        (103, 2000.0, 3),
        (104, 800.0, 1),
        (105, 1200.0, 2),
        (106, 300.0, 3),
    ]
    orders = []
    for i, (order_id, value, route_id) in enumerate(specs):
        order = Order(
            order_id=order_id,
            value_rs=value,
            route_id=route_id,
            delivery_time="01:00",
            created_at=_stamp(i),
        )
        db_session.add(order)
        orders.append(order)

    await db_session.commit()
    return orders
