"""
Driver database model.
Master record read as a snapshot at the start of every simulation run.
"""

import uuid
from datetime import datetime
from typing import List

from sqlalchemy import String, Float, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from greencart.database import Base, GUID


class Driver(Base):
    """
    Driver model representing delivery personnel.
    Stores the current shift and the hours worked over the last seven days.
    """
    __tablename__ = "drivers"

    id: Mapped[uuid.UUID] = mapped_column(
        GUID(),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    current_shift_hours: Mapped[float] = mapped_column(Float, default=0.0)
    # Oldest -> newest; the last entry is yesterday
    past_7_day_hours: Mapped[List[float]] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    def __repr__(self) -> str:
        return f"<Driver(id={self.id}, name={self.name})>"
