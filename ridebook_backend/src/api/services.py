"""
Write operations for the ride-booking schema.

Routers and scripts go through these helpers so that lifecycle rules are
checked in one place and engine constraint violations surface as domain
errors (see errors.py). Every helper commits on success; on an
IntegrityError the session is rolled back, leaving no partial effect.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.api.errors import (
    InvalidTransitionError,
    RecordNotFoundError,
    RoleMismatchError,
    translate_integrity_error,
)
from src.api.models.payment import Payment, PaymentMode, PaymentStatus
from src.api.models.rating import Rating
from src.api.models.ride import TERMINAL_STATUSES, Ride, RideStatus
from src.api.models.user import User, UserType
from src.api.models.vehicle import Vehicle, VehicleType

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utcnow() -> datetime:
    """Return an aware UTC timestamp."""
    return datetime.now(timezone.utc)


def _commit(db: Session, obj: T) -> T:
    """Commit the pending change and refresh obj, translating constraint failures."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise translate_integrity_error(exc) from exc
    db.refresh(obj)
    return obj


def _get_or_404(db: Session, model: type[T], pk: int, label: str) -> T:
    obj = db.get(model, pk)
    if obj is None:
        raise RecordNotFoundError(f"{label} {pk} not found.")
    return obj


def _allowed_transitions() -> dict[RideStatus, set[RideStatus]]:
    """
    Transition rules.

    requested -> ongoing -> completed
    Cancellation can happen from requested/ongoing.
    """
    return {
        RideStatus.requested: {RideStatus.ongoing, RideStatus.cancelled},
        RideStatus.ongoing: {RideStatus.completed, RideStatus.cancelled},
        RideStatus.completed: set(),
        RideStatus.cancelled: set(),
    }


def _validate_transition(current: RideStatus, new: RideStatus) -> None:
    allowed = _allowed_transitions().get(current, set())
    if new not in allowed:
        raise InvalidTransitionError(
            f"Invalid status transition from '{current.value}' to '{new.value}'."
        )


# PUBLIC_INTERFACE
def get_user(db: Session, user_id: int) -> User:
    return _get_or_404(db, User, user_id, "User")


# PUBLIC_INTERFACE
def get_vehicle(db: Session, vehicle_id: int) -> Vehicle:
    return _get_or_404(db, Vehicle, vehicle_id, "Vehicle")


# PUBLIC_INTERFACE
def get_ride(db: Session, ride_id: int) -> Ride:
    return _get_or_404(db, Ride, ride_id, "Ride")


# PUBLIC_INTERFACE
def get_payment(db: Session, payment_id: int) -> Payment:
    return _get_or_404(db, Payment, payment_id, "Payment")


# PUBLIC_INTERFACE
def get_rating(db: Session, rating_id: int) -> Rating:
    return _get_or_404(db, Rating, rating_id, "Rating")


# PUBLIC_INTERFACE
def create_user(db: Session, *, name: str, email: str, phone: str, user_type: UserType) -> User:
    """Insert a user; duplicate email or phone raises DuplicateRecordError."""
    user = User(name=name, email=email, phone=phone, user_type=user_type)
    db.add(user)
    _commit(db, user)
    logger.info("Created %s user %s", user.user_type.value, user.user_id)
    return user


# PUBLIC_INTERFACE
def create_vehicle(
    db: Session,
    *,
    driver_id: int,
    vehicle_type: VehicleType,
    vehicle_number: str,
    model: str,
) -> Vehicle:
    """Register a vehicle for a driver; the plate number must be globally unique."""
    driver = get_user(db, driver_id)
    if driver.user_type != UserType.driver:
        raise RoleMismatchError("Only drivers can own vehicles.")

    vehicle = Vehicle(
        driver_id=driver.user_id,
        vehicle_type=vehicle_type,
        vehicle_number=vehicle_number,
        model=model,
    )
    db.add(vehicle)
    _commit(db, vehicle)
    logger.info("Registered vehicle %s for driver %s", vehicle.vehicle_id, driver.user_id)
    return vehicle


# PUBLIC_INTERFACE
def request_ride(
    db: Session,
    *,
    rider_id: int,
    driver_id: int,
    vehicle_id: int,
    pickup_location: str,
    dropoff_location: str,
    fare: Decimal,
    distance_km: Decimal,
) -> Ride:
    """
    Create a ride in status=requested.

    Rules:
    - rider_id must reference a rider, driver_id a driver.
    - The vehicle must belong to the driver.
    """
    rider = get_user(db, rider_id)
    driver = get_user(db, driver_id)
    vehicle = get_vehicle(db, vehicle_id)
    if rider.user_type != UserType.rider:
        raise RoleMismatchError("Rides must be booked by a rider.")
    if driver.user_type != UserType.driver:
        raise RoleMismatchError("Rides must be assigned to a driver.")
    if vehicle.driver_id != driver.user_id:
        raise RoleMismatchError("Vehicle does not belong to the assigned driver.")

    ride = Ride(
        rider_id=rider.user_id,
        driver_id=driver.user_id,
        vehicle_id=vehicle.vehicle_id,
        pickup_location=pickup_location,
        dropoff_location=dropoff_location,
        fare=fare,
        distance_km=distance_km,
        ride_status=RideStatus.requested,
    )
    db.add(ride)
    _commit(db, ride)
    logger.info("Ride %s requested by rider %s", ride.ride_id, rider.user_id)
    return ride


def _move_ride(db: Session, ride_id: int, new_status: RideStatus) -> Ride:
    ride = get_ride(db, ride_id)
    _validate_transition(ride.ride_status, new_status)

    old_status = ride.ride_status
    now = _utcnow()
    ride.ride_status = new_status
    if new_status == RideStatus.ongoing:
        ride.pickup_time = now
    elif new_status == RideStatus.completed:
        ride.dropoff_time = now
        ride.completed_at = now

    db.add(ride)
    _commit(db, ride)
    logger.info("Ride %s moved from %s to %s", ride.ride_id, old_status.value, new_status.value)
    return ride


# PUBLIC_INTERFACE
def start_ride(db: Session, ride_id: int) -> Ride:
    return _move_ride(db, ride_id, RideStatus.ongoing)


# PUBLIC_INTERFACE
def complete_ride(db: Session, ride_id: int) -> Ride:
    return _move_ride(db, ride_id, RideStatus.completed)


# PUBLIC_INTERFACE
def cancel_ride(db: Session, ride_id: int) -> Ride:
    return _move_ride(db, ride_id, RideStatus.cancelled)


# PUBLIC_INTERFACE
def record_payment(
    db: Session,
    ride_id: int,
    *,
    payment_mode: PaymentMode,
    amount: Optional[Decimal] = None,
    payment_status: PaymentStatus = PaymentStatus.pending,
) -> Payment:
    """
    Record the payment for a ride that reached a terminal status.

    amount defaults to the ride fare. A second payment for the same ride is
    rejected by the unique ride reference (DuplicateRecordError).
    """
    ride = get_ride(db, ride_id)
    if ride.ride_status not in TERMINAL_STATUSES:
        raise InvalidTransitionError("Payments can only be recorded for completed or cancelled rides.")

    payment = Payment(
        ride_id=ride.ride_id,
        amount=ride.fare if amount is None else amount,
        payment_mode=payment_mode,
        payment_status=payment_status,
    )
    db.add(payment)
    _commit(db, payment)
    logger.info("Payment %s recorded for ride %s (%s)", payment.payment_id, ride.ride_id, payment_status.value)
    return payment


# PUBLIC_INTERFACE
def update_payment_status(db: Session, payment_id: int, new_status: PaymentStatus) -> Payment:
    """Settle a pending payment as completed or failed."""
    payment = get_payment(db, payment_id)
    if payment.payment_status != PaymentStatus.pending:
        raise InvalidTransitionError(
            f"Payment {payment_id} is already '{payment.payment_status.value}'."
        )
    if new_status == PaymentStatus.pending:
        raise InvalidTransitionError("Payment is already pending.")

    payment.payment_status = new_status
    payment.transaction_time = _utcnow()
    db.add(payment)
    _commit(db, payment)
    logger.info("Payment %s marked %s", payment.payment_id, new_status.value)
    return payment


# PUBLIC_INTERFACE
def record_rating(
    db: Session,
    ride_id: int,
    *,
    rider_rating: Decimal,
    driver_rating: Decimal,
    rider_feedback: Optional[str] = None,
    driver_feedback: Optional[str] = None,
) -> Rating:
    """
    Rate a completed ride.

    Ratings are rounded to one decimal by the model before the table CHECKs
    reject anything outside [1, 5].
    """
    ride = get_ride(db, ride_id)
    if ride.ride_status != RideStatus.completed:
        raise InvalidTransitionError("Only completed rides can be rated.")

    rating = Rating(
        ride_id=ride.ride_id,
        rider_rating=rider_rating,
        driver_rating=driver_rating,
        rider_feedback=rider_feedback,
        driver_feedback=driver_feedback,
    )
    db.add(rating)
    _commit(db, rating)
    logger.info("Rating %s recorded for ride %s", rating.rating_id, ride.ride_id)
    return rating


def _delete(db: Session, obj: object, label: str) -> None:
    db.delete(obj)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise translate_integrity_error(exc) from exc
    logger.info("Deleted %s", label)


# PUBLIC_INTERFACE
def delete_user(db: Session, user_id: int) -> None:
    """Delete a user; rejected (ReferenceViolationError) while vehicles or rides reference it."""
    user = get_user(db, user_id)
    _delete(db, user, f"user {user_id}")


# PUBLIC_INTERFACE
def delete_vehicle(db: Session, vehicle_id: int) -> None:
    """Delete a vehicle; rejected (ReferenceViolationError) while rides reference it."""
    vehicle = get_vehicle(db, vehicle_id)
    _delete(db, vehicle, f"vehicle {vehicle_id}")
