#!/usr/bin/env python3
"""
Seed the master data tables from the bundled data files.

Usage:
    python -m scripts.seed_data [--data-dir data]

Replaces all drivers, routes and orders with the contents of:
- routes.csv   (route_id, distance_km, traffic_level, base_time_min)
- orders.csv   (order_id, value_rs, route_id, delivery_time)
- drivers.json (list of {name, currentShiftHours, past7DayHours})

Simulation history is left untouched. Everything is written in one
transaction.
"""

import argparse
import asyncio
import csv
import json
import logging
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import List

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from greencart.config import get_settings
from greencart.core.logging_config import configure_logging
from greencart.database import async_session_maker, init_db
from greencart.models import Driver, Route, Order
from greencart.schemas.driver import DriverInput
from greencart.schemas.order import OrderInput
from greencart.schemas.route import RouteInput

logger = logging.getLogger("seed_data")

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def load_routes(path: Path) -> List[RouteInput]:
    """Parse routes.csv into validated route payloads."""
    with open(path, newline="", encoding="utf-8") as f:
        return [
            RouteInput(
                route_id=int(row["route_id"]),
                distance_km=float(row["distance_km"]),
                traffic_level=row["traffic_level"].strip(),
                base_time_min=float(row["base_time_min"]),
            )
            for row in csv.DictReader(f)
            if row.get("route_id")
        ]


def load_orders(path: Path) -> List[OrderInput]:
    """Parse orders.csv into validated order payloads."""
    with open(path, newline="", encoding="utf-8") as f:
        return [
            OrderInput(
                order_id=int(row["order_id"]),
                value_rs=float(row["value_rs"]),
                route_id=int(row["route_id"]),
                delivery_time=row["delivery_time"].strip().zfill(5),
            )
            for row in csv.DictReader(f)
            if row.get("order_id")
        ]


def load_drivers(path: Path) -> List[DriverInput]:
    """Parse drivers.json into validated driver payloads."""
    with open(path, encoding="utf-8") as f:
        return [DriverInput.model_validate(item) for item in json.load(f)]


async def seed_database(
    db: AsyncSession,
    drivers: List[DriverInput],
    routes: List[RouteInput],
    orders: List[OrderInput],
) -> dict:
    """
    Replace master records with the given payloads.

    Rows get strictly increasing created_at values so the roster keeps the
    file order, which is the order simulations assign drivers in.
    """
    known_routes = {r.route_id for r in routes}
    dangling = [o.order_id for o in orders if o.route_id not in known_routes]
    if dangling:
        raise ValueError(f"Orders reference unknown routes: {dangling}")

    await db.execute(delete(Order))
    await db.execute(delete(Route))
    await db.execute(delete(Driver))

    base_time = datetime.utcnow()
    for offset, route in enumerate(routes):
        stamp = base_time + timedelta(microseconds=offset)
        db.add(Route(**route.model_dump(), created_at=stamp, updated_at=stamp))
    for offset, order in enumerate(orders):
        stamp = base_time + timedelta(microseconds=offset)
        db.add(Order(**order.model_dump(), created_at=stamp, updated_at=stamp))
    for offset, driver in enumerate(drivers):
        stamp = base_time + timedelta(microseconds=offset)
        db.add(Driver(**driver.model_dump(), created_at=stamp, updated_at=stamp))

    await db.commit()

    counts = {"drivers": len(drivers), "routes": len(routes), "orders": len(orders)}
    logger.info(f"Seeded {counts}")
    return counts


async def run_seed(data_dir: Path) -> dict:
    routes = load_routes(data_dir / "routes.csv")
    orders = load_orders(data_dir / "orders.csv")
    drivers = load_drivers(data_dir / "drivers.json")
    logger.info(
        f"Loaded {len(drivers)} drivers, {len(routes)} routes, {len(orders)} orders from {data_dir}"
    )

    await init_db()
    async with async_session_maker() as db:
        return await seed_database(db, drivers, routes, orders)


def main() -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Seed GreenCart master data")
    parser.add_argument("--data-dir", type=Path, default=DEFAULT_DATA_DIR)
    args = parser.parse_args()

    configure_logging(get_settings().log_level)
    try:
        asyncio.run(run_seed(args.data_dir))
    except Exception as e:
        logger.error(f"Seed failed: {e}")
        return 1
    logger.info("Seed complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
