import enum
from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Integer, Numeric, func
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from src.api.models.base import CENTS, Base, to_scale


class PaymentMode(str, enum.Enum):
    cash = "cash"
    credit_card = "credit_card"
    debit_card = "debit_card"
    wallet = "wallet"


class PaymentStatus(str, enum.Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"


class Payment(Base):
    """
    ORM model for the `payments` table.

    ride_id is unique: a ride has at most one payment.
    """

    __tablename__ = "payments"
    __table_args__ = (CheckConstraint("amount >= 0", name="amount_non_negative"),)

    payment_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ride_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("rides.ride_id", ondelete="RESTRICT", onupdate="RESTRICT"),
        unique=True,
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    payment_mode: Mapped[PaymentMode] = mapped_column(
        Enum(PaymentMode, name="payment_mode", native_enum=False, create_constraint=True, length=15),
        nullable=False,
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, name="payment_status", native_enum=False, create_constraint=True, length=10),
        nullable=False,
        default=PaymentStatus.pending,
        server_default=PaymentStatus.pending.value,
        index=True,
    )
    transaction_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    ride = relationship("Ride", lazy="joined")

    @validates("amount")
    def _two_decimals(self, _key: str, value: Decimal) -> Decimal | None:
        return to_scale(value, CENTS)
