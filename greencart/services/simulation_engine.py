"""
Delivery simulation engine.

Assigns every order to a driver by static round-robin, schedules it on the
driver's own clock, and prices the delivery. Pure computation: callers pass
in snapshots of the master records and receive an immutable report.

Per order, in input sequence:
    1. driver = pool[i % len(pool)]
    2. route lookup by routeId (missing route -> order skipped)
    3. fatigue: yesterday > 8h -> ceil(baseTimeMin * 1.3)
    4. capacity: worked + duration > cap -> unscheduled, counted late, 0 profit
    5. deadline = start + baseTimeMin + 10, on time iff finish <= deadline
    6. fuel = km * 5 (+ km * 2 on High traffic)
    7. profit = value + bonus - penalty - fuel
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from greencart.core.exceptions import InsufficientDataError

logger = logging.getLogger(__name__)

HIGH_TRAFFIC = "High"


@dataclass(frozen=True)
class DriverSnapshot:
    """Driver as seen by one simulation run."""
    name: str
    past_7_day_hours: Tuple[float, ...] = ()
    current_shift_hours: float = 0.0

    @property
    def last_day_hours(self) -> float:
        """Hours worked on the most recent prior day (0 with no history)."""
        if not self.past_7_day_hours:
            return 0.0
        return self.past_7_day_hours[-1]


@dataclass(frozen=True)
class RouteSnapshot:
    """Route as seen by one simulation run."""
    route_id: int
    distance_km: float
    traffic_level: str
    base_time_min: float


@dataclass(frozen=True)
class OrderSnapshot:
    """Order as seen by one simulation run."""
    order_id: int
    value_rs: float
    route_id: int
    delivery_time: str = ""


@dataclass(frozen=True)
class RunParameters:
    """Manager-supplied knobs for a what-if run."""
    drivers_available: int
    start_time: str
    max_hours_per_driver: float


@dataclass(frozen=True)
class SimulationRules:
    """
    Company rules applied while pricing and timing deliveries.
    Defaults are the production rules.
    """
    fatigue_threshold_hours: float = 8.0
    fatigue_multiplier: float = 1.3
    deadline_buffer_minutes: float = 10.0
    fuel_cost_per_km: float = 5.0
    high_traffic_surcharge_per_km: float = 2.0
    high_value_threshold: float = 1000.0
    on_time_bonus_rate: float = 0.1
    late_penalty: float = 50.0

    @classmethod
    def from_settings(cls, settings) -> "SimulationRules":
        """Build rules from application settings."""
        return cls(
            fatigue_threshold_hours=settings.fatigue_threshold_hours,
            fatigue_multiplier=settings.fatigue_multiplier,
            deadline_buffer_minutes=settings.deadline_buffer_minutes,
            fuel_cost_per_km=settings.fuel_cost_per_km,
            high_traffic_surcharge_per_km=settings.high_traffic_surcharge_per_km,
            high_value_threshold=settings.high_value_threshold,
            on_time_bonus_rate=settings.on_time_bonus_rate,
            late_penalty=settings.late_penalty,
        )


@dataclass(frozen=True)
class AssignmentRecord:
    """Outcome for a single order."""
    order_id: int
    driver_name: str
    route_id: int
    on_time: bool
    profit_for_order: float

    def to_dict(self) -> dict:
        return {
            "orderId": self.order_id,
            "driverName": self.driver_name,
            "routeId": self.route_id,
            "onTime": self.on_time,
            "profitForOrder": self.profit_for_order,
        }


@dataclass(frozen=True)
class FuelCostBreakdown:
    base_fuel: float = 0.0
    high_traffic_surcharge: float = 0.0


@dataclass(frozen=True)
class SimulationKPIs:
    """Aggregated run metrics."""
    total_profit: float
    efficiency: int
    on_time: int
    late: int
    fuel_cost_breakdown: FuelCostBreakdown


@dataclass(frozen=True)
class SimulationReport:
    """Complete output of one run."""
    inputs: RunParameters
    kpis: SimulationKPIs
    assignments: Tuple[AssignmentRecord, ...]
    # Orders whose routeId matched no route; excluded from counts and profit
    skipped_orders: int = 0
    # Orders that did not fit within maxHoursPerDriver
    capacity_rejections: int = 0


@dataclass
class _DriverClock:
    """Mutable per-driver state, owned by a single run."""
    current_min: float
    worked_min: float = 0.0


@dataclass
class _Totals:
    total_profit: float = 0.0
    on_time: int = 0
    late: int = 0
    base_fuel: float = 0.0
    high_traffic_surcharge: float = 0.0
    skipped: int = 0
    rejected: int = 0
    assignments: List[AssignmentRecord] = field(default_factory=list)


def parse_hhmm(value: str) -> int:
    """
    Convert an "HH:MM" string to minutes since midnight.

    Raises:
        ValueError: if the string is not a valid 24h time
    """
    try:
        hours_str, minutes_str = value.split(":")
        hours, minutes = int(hours_str), int(minutes_str)
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid HH:MM time: {value!r}")
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Invalid HH:MM time: {value!r}")
    return hours * 60 + minutes


def effective_duration(
    base_time_min: float,
    last_day_hours: float,
    rules: SimulationRules = SimulationRules(),
) -> float:
    """
    Delivery duration after the fatigue adjustment.

    Args:
        base_time_min: Nominal route duration
        last_day_hours: Hours the driver worked yesterday
        rules: Rule set (fatigue threshold and multiplier)

    Returns:
        ceil(base * multiplier) for a fatigued driver, base otherwise
    """
    if last_day_hours > rules.fatigue_threshold_hours:
        return math.ceil(base_time_min * rules.fatigue_multiplier)
    return base_time_min


def calculate_efficiency(on_time: int, total_orders: int) -> int:
    """On-time percentage, rounded half up; 0 when there are no orders."""
    if total_orders <= 0:
        return 0
    return int(math.floor(on_time / total_orders * 100 + 0.5))


def calculate_fuel_cost(route: RouteSnapshot, rules: SimulationRules) -> Tuple[float, float]:
    """Return (base fuel, high traffic surcharge) for one delivery."""
    base = route.distance_km * rules.fuel_cost_per_km
    surcharge = 0.0
    if route.traffic_level == HIGH_TRAFFIC:
        surcharge = route.distance_km * rules.high_traffic_surcharge_per_km
    return base, surcharge


def run_simulation(
    drivers: Sequence[DriverSnapshot],
    routes: Sequence[RouteSnapshot],
    orders: Sequence[OrderSnapshot],
    params: RunParameters,
    rules: Optional[SimulationRules] = None,
) -> SimulationReport:
    """
    Run one delivery simulation.

    Args:
        drivers: All drivers, in roster order; the first
            `params.drivers_available` take part
        routes: Known routes
        orders: Orders to deliver, in processing order
        params: Run parameters
        rules: Pricing/timing rules (production defaults when omitted)

    Returns:
        SimulationReport with one assignment per order that found its route

    Raises:
        InsufficientDataError: empty driver pool, route set or order set
    """
    rules = rules or SimulationRules()
    pool = list(drivers[:params.drivers_available])

    if not pool or not routes or not orders:
        raise InsufficientDataError(len(pool), len(routes), len(orders))

    start_min = parse_hhmm(params.start_time)
    cap_min = params.max_hours_per_driver * 60
    routes_by_id: Dict[int, RouteSnapshot] = {}
    for route in routes:
        routes_by_id.setdefault(route.route_id, route)

    clocks = {index: _DriverClock(current_min=start_min) for index in range(len(pool))}
    totals = _Totals()

    for i, order in enumerate(orders):
        driver_index = i % len(pool)
        driver = pool[driver_index]
        clock = clocks[driver_index]

        route = routes_by_id.get(order.route_id)
        if route is None:
            totals.skipped += 1
            logger.debug(f"Order {order.order_id} skipped: route {order.route_id} not found")
            continue

        duration = effective_duration(route.base_time_min, driver.last_day_hours, rules)

        if clock.worked_min + duration > cap_min:
            totals.late += 1
            totals.rejected += 1
            totals.assignments.append(AssignmentRecord(
                order_id=order.order_id,
                driver_name=driver.name,
                route_id=route.route_id,
                on_time=False,
                profit_for_order=0,
            ))
            logger.debug(
                f"Order {order.order_id} not scheduled: {driver.name} would exceed "
                f"{params.max_hours_per_driver}h"
            )
            continue

        order_start = clock.current_min
        finish = order_start + duration
        clock.current_min = finish
        clock.worked_min += duration

        deadline = order_start + route.base_time_min + rules.deadline_buffer_minutes
        on_time = finish <= deadline

        base_fuel, surcharge = calculate_fuel_cost(route, rules)
        totals.base_fuel += base_fuel
        totals.high_traffic_surcharge += surcharge

        bonus = 0.0
        penalty = 0.0
        if on_time and order.value_rs > rules.high_value_threshold:
            bonus = order.value_rs * rules.on_time_bonus_rate
        if not on_time:
            penalty = rules.late_penalty

        profit = order.value_rs + bonus - penalty - (base_fuel + surcharge)
        totals.total_profit += profit
        if on_time:
            totals.on_time += 1
        else:
            totals.late += 1

        totals.assignments.append(AssignmentRecord(
            order_id=order.order_id,
            driver_name=driver.name,
            route_id=route.route_id,
            on_time=on_time,
            profit_for_order=profit,
        ))

    kpis = SimulationKPIs(
        total_profit=totals.total_profit,
        efficiency=calculate_efficiency(totals.on_time, len(orders)),
        on_time=totals.on_time,
        late=totals.late,
        fuel_cost_breakdown=FuelCostBreakdown(
            base_fuel=totals.base_fuel,
            high_traffic_surcharge=totals.high_traffic_surcharge,
        ),
    )

    return SimulationReport(
        inputs=params,
        kpis=kpis,
        assignments=tuple(totals.assignments),
        skipped_orders=totals.skipped,
        capacity_rejections=totals.rejected,
    )
