"""
Order database model.
"""

import uuid
from datetime import datetime

from sqlalchemy import Integer, Float, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from greencart.database import Base, GUID


class Order(Base):
    """
    Delivery order with its value and the route it travels.
    `route_id` is the Route business key, checked by the API on write only.
    """
    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(
        GUID(),
        primary_key=True,
        default=uuid.uuid4,
    )
    order_id: Mapped[int] = mapped_column(
        Integer,
        unique=True,
        nullable=False,
        index=True,
    )
    value_rs: Mapped[float] = mapped_column(Float, nullable=False)
    route_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    delivery_time: Mapped[str] = mapped_column(String(5), nullable=False)  # HH:MM

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
        return f"<Order(order_id={self.order_id}, route_id={self.route_id})>"
