"""
SimulationResult database model.
One immutable row per simulation run.
"""

import uuid
from datetime import datetime
from typing import List

from sqlalchemy import Integer, Float, String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from greencart.database import Base, GUID


class SimulationResult(Base):
    """
    Persisted simulation report.

    Inputs and KPIs are plain columns; the per-order assignments are kept
    as an ordered JSON list so the whole report is a single insert.
    Rows are appended and never updated.
    """
    __tablename__ = "simulation_results"

    id: Mapped[uuid.UUID] = mapped_column(
        GUID(),
        primary_key=True,
        default=uuid.uuid4,
    )

    # Inputs
    drivers_available: Mapped[int] = mapped_column(Integer, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    max_hours_per_driver: Mapped[float] = mapped_column(Float, nullable=False)

    # KPIs
    total_profit: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    efficiency: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    on_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    late: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    base_fuel: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    high_traffic_surcharge: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # Diagnostics
    skipped_orders: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    assignments: Mapped[List[dict]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<SimulationResult(id={self.id}, efficiency={self.efficiency})>"
