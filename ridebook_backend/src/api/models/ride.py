from __future__ import annotations

import enum
from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Index, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from src.api.models.base import CENTS, Base, to_scale


class RideStatus(str, enum.Enum):
    """
    Ride lifecycle values.

    requested -> ongoing -> completed
    requested | ongoing -> cancelled

    completed and cancelled are terminal.
    """

    requested = "requested"
    ongoing = "ongoing"
    completed = "completed"
    cancelled = "cancelled"


TERMINAL_STATUSES = frozenset({RideStatus.completed, RideStatus.cancelled})


class Ride(Base):
    """
    ORM model for the `rides` table.

    Every reference (rider, driver, vehicle) is ON DELETE/UPDATE RESTRICT.
    """

    __tablename__ = "rides"
    __table_args__ = (
        CheckConstraint("fare >= 0", name="fare_non_negative"),
        CheckConstraint("distance_km >= 0", name="distance_non_negative"),
    )

    ride_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    rider_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.user_id", ondelete="RESTRICT", onupdate="RESTRICT"),
        nullable=False,
        index=True,
    )
    driver_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.user_id", ondelete="RESTRICT", onupdate="RESTRICT"),
        nullable=False,
        index=True,
    )
    vehicle_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("vehicles.vehicle_id", ondelete="RESTRICT", onupdate="RESTRICT"),
        nullable=False,
        index=True,
    )

    pickup_location: Mapped[str] = mapped_column(String(255), nullable=False)
    dropoff_location: Mapped[str] = mapped_column(String(255), nullable=False)

    fare: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    distance_km: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    ride_status: Mapped[RideStatus] = mapped_column(
        Enum(RideStatus, name="ride_status", native_enum=False, create_constraint=True, length=10),
        nullable=False,
        default=RideStatus.requested,
        server_default=RideStatus.requested.value,
        index=True,
    )

    pickup_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    dropoff_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    rider = relationship("User", foreign_keys=[rider_id], lazy="joined")
    driver = relationship("User", foreign_keys=[driver_id], lazy="joined")
    vehicle = relationship("Vehicle", lazy="joined")

    @validates("fare", "distance_km")
    def _two_decimals(self, _key: str, value: Decimal) -> Decimal | None:
        return to_scale(value, CENTS)

    @property
    def is_terminal(self) -> bool:
        return self.ride_status in TERMINAL_STATUSES


# Supports the "most popular pickup" report.
Index("idx_rides_pickup_location", Ride.pickup_location)
