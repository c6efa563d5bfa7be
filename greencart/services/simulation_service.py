"""
Simulation run orchestration.

Loads a snapshot of the master records, runs the simulation engine and
appends the resulting report to the simulation history. This is the only
part of a run that touches the database.
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from greencart.config import get_settings
from greencart.core.exceptions import SimulationNotFoundError, StorageFailureError
from greencart.models import Driver, Route, Order, SimulationResult
from greencart.schemas.simulation import (
    FuelCostBreakdownSchema,
    SimulationAssignmentSchema,
    SimulationInputs,
    SimulationKPIsSchema,
    SimulationReportResponse,
)
from greencart.services.simulation_engine import (
    DriverSnapshot,
    OrderSnapshot,
    RouteSnapshot,
    RunParameters,
    SimulationReport,
    SimulationRules,
    run_simulation,
)

logger = logging.getLogger(__name__)

SNAPSHOT_ISOLATION = "REPEATABLE READ"

Snapshot = Tuple[List[DriverSnapshot], List[RouteSnapshot], List[OrderSnapshot]]


async def load_snapshot(db: AsyncSession) -> Snapshot:
    """
    Read drivers, routes and orders once and freeze them for a run.

    Drivers and orders come back in insertion order, which drives
    round-robin assignment.

    Raises:
        StorageFailureError: if any of the reads fails
    """
    try:
        # READ COMMITTED would give each SELECT its own snapshot
        bind = db.bind
        if bind is not None and bind.dialect.name == "postgresql":
            await db.connection(execution_options={"isolation_level": SNAPSHOT_ISOLATION})
        drivers_result = await db.execute(select(Driver).order_by(Driver.created_at, Driver.id))
        routes_result = await db.execute(select(Route).order_by(Route.created_at, Route.id))
        orders_result = await db.execute(select(Order).order_by(Order.created_at, Order.id))
    except SQLAlchemyError as e:
        logger.error(f"Failed to load simulation snapshot: {e}")
        raise StorageFailureError("snapshot load", e) from e

    drivers = [
        DriverSnapshot(
            name=d.name,
            past_7_day_hours=tuple(d.past_7_day_hours or ()),
            current_shift_hours=d.current_shift_hours or 0.0,
        )
        for d in drivers_result.scalars().all()
    ]
    routes = [
        RouteSnapshot(
            route_id=r.route_id,
            distance_km=r.distance_km,
            traffic_level=r.traffic_level.value,
            base_time_min=r.base_time_min,
        )
        for r in routes_result.scalars().all()
    ]
    orders = [
        OrderSnapshot(
            order_id=o.order_id,
            value_rs=o.value_rs,
            route_id=o.route_id,
            delivery_time=o.delivery_time,
        )
        for o in orders_result.scalars().all()
    ]
    return drivers, routes, orders


def report_to_model(report: SimulationReport) -> SimulationResult:
    """Flatten an engine report into a SimulationResult row."""
    kpis = report.kpis
    return SimulationResult(
        drivers_available=report.inputs.drivers_available,
        start_time=report.inputs.start_time,
        max_hours_per_driver=report.inputs.max_hours_per_driver,
        total_profit=kpis.total_profit,
        efficiency=kpis.efficiency,
        on_time=kpis.on_time,
        late=kpis.late,
        base_fuel=kpis.fuel_cost_breakdown.base_fuel,
        high_traffic_surcharge=kpis.fuel_cost_breakdown.high_traffic_surcharge,
        skipped_orders=report.skipped_orders,
        assignments=[a.to_dict() for a in report.assignments],
    )


def build_report_response(result: SimulationResult) -> SimulationReportResponse:
    """Shape a stored SimulationResult into the public report layout."""
    return SimulationReportResponse(
        id=result.id,
        created_at=result.created_at,
        inputs=SimulationInputs(
            drivers_available=result.drivers_available,
            start_time=result.start_time,
            max_hours_per_driver=result.max_hours_per_driver,
        ),
        kpis=SimulationKPIsSchema(
            total_profit=result.total_profit,
            efficiency=result.efficiency,
            on_time=result.on_time,
            late=result.late,
            fuel_cost_breakdown=FuelCostBreakdownSchema(
                base_fuel=result.base_fuel,
                high_traffic_surcharge=result.high_traffic_surcharge,
            ),
        ),
        assignments=[
            SimulationAssignmentSchema.model_validate(a) for a in result.assignments
        ],
        skipped_orders=result.skipped_orders,
    )


async def execute_simulation(
    db: AsyncSession,
    params: RunParameters,
    rules: Optional[SimulationRules] = None,
) -> SimulationResult:
    """
    Run a simulation against the current master records and store it.

    Args:
        db: Database session
        params: Run parameters (already validated)
        rules: Rule set; built from settings when omitted

    Returns:
        The persisted SimulationResult (id and created_at assigned)

    Raises:
        InsufficientDataError: no drivers, routes or orders to simulate
        StorageFailureError: reading the snapshot or writing the result failed
    """
    if rules is None:
        rules = SimulationRules.from_settings(get_settings())

    logger.info(
        f"Starting simulation: drivers={params.drivers_available}, "
        f"start={params.start_time}, max_hours={params.max_hours_per_driver}"
    )

    drivers, routes, orders = await load_snapshot(db)
    report = run_simulation(drivers, routes, orders, params, rules)

    result = report_to_model(report)
    try:
        db.add(result)
        await db.commit()
        await db.refresh(result)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to store simulation result: {e}")
        raise StorageFailureError("result persist", e) from e

    if report.skipped_orders:
        logger.warning(f"Simulation {result.id}: {report.skipped_orders} orders skipped (unknown route)")
    logger.info(
        f"Simulation {result.id} completed: profit={report.kpis.total_profit:.2f}, "
        f"efficiency={report.kpis.efficiency}%, on_time={report.kpis.on_time}, "
        f"late={report.kpis.late}, capacity_rejections={report.capacity_rejections}"
    )
    return result


async def list_recent_simulations(db: AsyncSession, limit: int) -> List[SimulationResult]:
    """Return the `limit` most recent simulation results, newest first."""
    try:
        result = await db.execute(
            select(SimulationResult)
            .order_by(SimulationResult.created_at.desc(), SimulationResult.id.desc())
            .limit(limit)
        )
    except SQLAlchemyError as e:
        raise StorageFailureError("history read", e) from e
    return list(result.scalars().all())


async def get_simulation(db: AsyncSession, simulation_id: UUID) -> SimulationResult:
    """
    Fetch a single simulation result.

    Raises:
        SimulationNotFoundError: no result with that id
    """
    try:
        result = await db.get(SimulationResult, simulation_id)
    except SQLAlchemyError as e:
        raise StorageFailureError("result read", e) from e
    if result is None:
        raise SimulationNotFoundError(simulation_id)
    return result
