"""
Route database model.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Integer, Float, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column

from greencart.database import Base, GUID


class TrafficLevel(str, enum.Enum):
    """Traffic conditions on a route."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Route(Base):
    """
    Route model representing a delivery route.
    Orders reference routes through the business key `route_id`.
    """
    __tablename__ = "routes"

    id: Mapped[uuid.UUID] = mapped_column(
        GUID(),
        primary_key=True,
        default=uuid.uuid4,
    )
    route_id: Mapped[int] = mapped_column(
        Integer,
        unique=True,
        nullable=False,
        index=True,
    )
    distance_km: Mapped[float] = mapped_column(Float, nullable=False)
    traffic_level: Mapped[TrafficLevel] = mapped_column(
        Enum(TrafficLevel, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    base_time_min: Mapped[float] = mapped_column(Float, nullable=False)

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
        return f"<Route(route_id={self.route_id}, traffic={self.traffic_level})>"
