from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api import services
from src.api.db import get_db
from src.api.models.payment import Payment
from src.api.models.rating import Rating
from src.api.models.ride import Ride
from src.api.routers.payments import to_public as payment_to_public
from src.api.routers.ratings import to_public as rating_to_public
from src.api.schemas.payment import PaymentCreateRequest, PaymentPublic
from src.api.schemas.rating import RatingCreateRequest, RatingPublic
from src.api.schemas.ride import RideCreateRequest, RidePublic

router = APIRouter(prefix="/rides", tags=["rides"])


def _to_public(ride: Ride) -> RidePublic:
    """Convert ORM Ride row to public schema."""
    return RidePublic(
        ride_id=ride.ride_id,
        rider_id=ride.rider_id,
        driver_id=ride.driver_id,
        vehicle_id=ride.vehicle_id,
        pickup_location=ride.pickup_location,
        dropoff_location=ride.dropoff_location,
        fare=ride.fare,
        distance_km=ride.distance_km,
        ride_status=ride.ride_status,
        pickup_time=ride.pickup_time,
        dropoff_time=ride.dropoff_time,
        created_at=ride.created_at,
        completed_at=ride.completed_at,
    )


@router.post(
    "",
    response_model=RidePublic,
    status_code=status.HTTP_201_CREATED,
    summary="Create a ride booking",
    description="Book a ride for a rider with a driver and the driver's vehicle (status=requested).",
    operation_id="rides_create",
)
def create_ride(payload: RideCreateRequest, db: Session = Depends(get_db)) -> RidePublic:
    """
    Create a new ride booking.

    Rules:
    - rider_id must be a rider and driver_id a driver.
    - vehicle_id must belong to driver_id.
    """
    ride = services.request_ride(
        db,
        rider_id=payload.rider_id,
        driver_id=payload.driver_id,
        vehicle_id=payload.vehicle_id,
        pickup_location=payload.pickup_location,
        dropoff_location=payload.dropoff_location,
        fare=payload.fare,
        distance_km=payload.distance_km,
    )
    return _to_public(ride)


@router.get(
    "/{ride_id}",
    response_model=RidePublic,
    summary="Get ride by id",
    operation_id="rides_get_by_id",
)
def get_ride(ride_id: int, db: Session = Depends(get_db)) -> RidePublic:
    return _to_public(services.get_ride(db, ride_id))


@router.post(
    "/{ride_id}/start",
    response_model=RidePublic,
    summary="Start a ride",
    description="Move a requested ride to ongoing and stamp the pickup time.",
    operation_id="rides_start",
)
def start_ride(ride_id: int, db: Session = Depends(get_db)) -> RidePublic:
    return _to_public(services.start_ride(db, ride_id))


@router.post(
    "/{ride_id}/complete",
    response_model=RidePublic,
    summary="Complete a ride",
    description="Move an ongoing ride to completed and stamp drop-off/completion times.",
    operation_id="rides_complete",
)
def complete_ride(ride_id: int, db: Session = Depends(get_db)) -> RidePublic:
    return _to_public(services.complete_ride(db, ride_id))


@router.post(
    "/{ride_id}/cancel",
    response_model=RidePublic,
    summary="Cancel a ride",
    description="Cancel a requested or ongoing ride. Completed and cancelled rides are terminal.",
    operation_id="rides_cancel",
)
def cancel_ride(ride_id: int, db: Session = Depends(get_db)) -> RidePublic:
    return _to_public(services.cancel_ride(db, ride_id))


@router.post(
    "/{ride_id}/payment",
    response_model=PaymentPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Record the payment for a ride",
    description="Only rides in a terminal status can be paid, and only once.",
    operation_id="rides_record_payment",
)
def record_payment(ride_id: int, payload: PaymentCreateRequest, db: Session = Depends(get_db)) -> PaymentPublic:
    payment: Payment = services.record_payment(
        db,
        ride_id,
        payment_mode=payload.payment_mode,
        amount=payload.amount,
        payment_status=payload.payment_status,
    )
    return payment_to_public(payment)


@router.post(
    "/{ride_id}/rating",
    response_model=RatingPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Rate a ride",
    description="Only completed rides can be rated, and only once. Scores are 1.0-5.0.",
    operation_id="rides_record_rating",
)
def record_rating(ride_id: int, payload: RatingCreateRequest, db: Session = Depends(get_db)) -> RatingPublic:
    rating: Rating = services.record_rating(
        db,
        ride_id,
        rider_rating=payload.rider_rating,
        driver_rating=payload.driver_rating,
        rider_feedback=payload.rider_feedback,
        driver_feedback=payload.driver_feedback,
    )
    return rating_to_public(rating)
