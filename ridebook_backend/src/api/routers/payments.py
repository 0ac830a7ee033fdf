from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.api import services
from src.api.db import get_db
from src.api.models.payment import Payment
from src.api.schemas.payment import PaymentPublic, PaymentStatusUpdateRequest

router = APIRouter(prefix="/payments", tags=["payments"])


def to_public(payment: Payment) -> PaymentPublic:
    """Convert ORM Payment row to public schema."""
    return PaymentPublic(
        payment_id=payment.payment_id,
        ride_id=payment.ride_id,
        amount=payment.amount,
        payment_mode=payment.payment_mode,
        payment_status=payment.payment_status,
        transaction_time=payment.transaction_time,
    )


@router.get(
    "/{payment_id}",
    response_model=PaymentPublic,
    summary="Get payment by id",
    operation_id="payments_get_by_id",
)
def get_payment(payment_id: int, db: Session = Depends(get_db)) -> PaymentPublic:
    return to_public(services.get_payment(db, payment_id))


@router.patch(
    "/{payment_id}/status",
    response_model=PaymentPublic,
    summary="Settle a payment",
    description="Move a pending payment to completed or failed.",
    operation_id="payments_update_status",
)
def update_payment_status(
    payment_id: int,
    payload: PaymentStatusUpdateRequest,
    db: Session = Depends(get_db),
) -> PaymentPublic:
    return to_public(services.update_payment_status(db, payment_id, payload.payment_status))
