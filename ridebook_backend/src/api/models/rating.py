from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from src.api.models.base import TENTHS, Base, to_scale


class Rating(Base):
    """
    ORM model for the `ratings` table.

    Notes:
    - ride_id is unique: a ride is rated at most once.
    - rider_rating is the score given to the rider, driver_rating the score
      given to the driver; both are one-decimal values in [1, 5].
    """

    __tablename__ = "ratings"
    __table_args__ = (
        CheckConstraint("rider_rating BETWEEN 1 AND 5", name="rider_rating_range"),
        CheckConstraint("driver_rating BETWEEN 1 AND 5", name="driver_rating_range"),
    )

    rating_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ride_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("rides.ride_id", ondelete="RESTRICT", onupdate="RESTRICT"),
        unique=True,
        nullable=False,
    )
    rider_rating: Mapped[Decimal] = mapped_column(Numeric(2, 1), nullable=False)
    driver_rating: Mapped[Decimal] = mapped_column(Numeric(2, 1), nullable=False)
    rider_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    driver_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)

    ride = relationship("Ride", lazy="joined")

    @validates("rider_rating", "driver_rating")
    def _one_decimal(self, _key: str, value: Decimal) -> Decimal | None:
        return to_scale(value, TENTHS)
