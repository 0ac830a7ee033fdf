from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from src.api.models.payment import PaymentMode, PaymentStatus


class PaymentCreateRequest(BaseModel):
    payment_mode: PaymentMode = Field(..., description="One of cash, credit_card, debit_card, wallet.")
    amount: Optional[Decimal] = Field(
        default=None,
        ge=0,
        max_digits=10,
        decimal_places=2,
        description="Amount charged; defaults to the ride fare.",
    )
    payment_status: PaymentStatus = Field(default=PaymentStatus.pending, description="Initial payment status.")


class PaymentStatusUpdateRequest(BaseModel):
    payment_status: PaymentStatus = Field(..., description="New status: completed or failed.")


class PaymentPublic(BaseModel):
    payment_id: int = Field(..., description="Payment id.")
    ride_id: int = Field(..., description="Paid ride id.")
    amount: Decimal = Field(..., description="Amount.")
    payment_mode: PaymentMode = Field(..., description="Payment mode.")
    payment_status: PaymentStatus = Field(..., description="Payment status.")
    transaction_time: datetime = Field(..., description="When the transaction was recorded.")
