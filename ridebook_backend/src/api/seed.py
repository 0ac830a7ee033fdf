"""
Sample dataset used for local development and for exercising the reports.

The dataset has three riders (one who never rode), three drivers (one without
a vehicle), rides in every status, payments in every status, and ratings that
include negative feedback.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from src.api.models.payment import Payment, PaymentMode, PaymentStatus
from src.api.models.rating import Rating
from src.api.models.ride import Ride, RideStatus
from src.api.models.user import User, UserType
from src.api.models.vehicle import Vehicle, VehicleType

logger = logging.getLogger(__name__)

_USERS = [
    ("Aarav Sharma", "aarav@example.com", "9000000001", UserType.rider),
    ("Diya Patel", "diya@example.com", "9000000002", UserType.rider),
    ("Kabir Singh", "kabir@example.com", "9000000003", UserType.rider),
    ("Rohan Mehta", "rohan@example.com", "9000000004", UserType.driver),
    ("Isha Verma", "isha@example.com", "9000000005", UserType.driver),
    ("Vikram Rao", "vikram@example.com", "9000000006", UserType.driver),
]

# (driver email, type, plate, model)
_VEHICLES = [
    ("rohan@example.com", VehicleType.sedan, "KA01AB1234", "Maruti Dzire"),
    ("isha@example.com", VehicleType.suv, "KA02CD5678", "Toyota Innova"),
    ("isha@example.com", VehicleType.bike, "KA03EF9012", "Honda Activa"),
]

# (rider email, plate, pickup, dropoff, fare, distance, status)
_RIDES = [
    ("aarav@example.com", "KA01AB1234", "MG Road", "Airport", "450.00", "32.50", RideStatus.completed),
    ("diya@example.com", "KA01AB1234", "MG Road", "Koramangala", "180.00", "8.20", RideStatus.completed),
    ("aarav@example.com", "KA02CD5678", "Indiranagar", "Whitefield", "320.00", "18.40", RideStatus.completed),
    ("diya@example.com", "KA03EF9012", "MG Road", "HSR Layout", "95.00", "6.10", RideStatus.cancelled),
    ("aarav@example.com", "KA01AB1234", "Indiranagar", "MG Road", "150.00", "7.00", RideStatus.ongoing),
    ("diya@example.com", "KA02CD5678", "Jayanagar", "Airport", "500.00", "35.00", RideStatus.requested),
]

# (ride index, amount, mode, status)
_PAYMENTS = [
    (0, "450.00", PaymentMode.credit_card, PaymentStatus.completed),
    (1, "180.00", PaymentMode.wallet, PaymentStatus.pending),
    (2, "320.00", PaymentMode.cash, PaymentStatus.completed),
    (3, "50.00", PaymentMode.debit_card, PaymentStatus.failed),
]

# (ride index, rider_rating, driver_rating, rider_feedback, driver_feedback)
_RATINGS = [
    (0, "4.5", "4.8", "Polite and on time.", "Smooth ride."),
    (1, "3.0", "4.0", "Rider was late to the pickup point.", None),
    (2, "5.0", "3.2", None, "Rash driving on the highway."),
]


# PUBLIC_INTERFACE
def load_sample_data(db: Session) -> bool:
    """
    Insert the sample dataset unless the users table already has rows.

    Returns True when data was inserted.
    """
    if db.scalar(select(func.count(User.user_id))):
        logger.info("Database already populated; skipping sample data")
        return False

    users = {
        email: User(name=name, email=email, phone=phone, user_type=user_type)
        for name, email, phone, user_type in _USERS
    }
    db.add_all(users.values())
    db.flush()

    vehicles = {
        plate: Vehicle(driver_id=users[email].user_id, vehicle_type=vtype, vehicle_number=plate, model=model)
        for email, vtype, plate, model in _VEHICLES
    }
    db.add_all(vehicles.values())
    db.flush()

    base_time = datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc)
    rides = []
    for offset, (email, plate, pickup, dropoff, fare, distance, ride_status) in enumerate(_RIDES):
        vehicle = vehicles[plate]
        started = base_time + timedelta(hours=offset)
        ride = Ride(
            rider_id=users[email].user_id,
            driver_id=vehicle.driver_id,
            vehicle_id=vehicle.vehicle_id,
            pickup_location=pickup,
            dropoff_location=dropoff,
            fare=Decimal(fare),
            distance_km=Decimal(distance),
            ride_status=ride_status,
        )
        if ride_status in (RideStatus.ongoing, RideStatus.completed):
            ride.pickup_time = started
        if ride_status == RideStatus.completed:
            ride.dropoff_time = started + timedelta(minutes=40)
            ride.completed_at = ride.dropoff_time
        rides.append(ride)
    db.add_all(rides)
    db.flush()

    db.add_all(
        Payment(
            ride_id=rides[index].ride_id,
            amount=Decimal(amount),
            payment_mode=mode,
            payment_status=payment_status,
        )
        for index, amount, mode, payment_status in _PAYMENTS
    )
    db.add_all(
        Rating(
            ride_id=rides[index].ride_id,
            rider_rating=Decimal(rider_rating),
            driver_rating=Decimal(driver_rating),
            rider_feedback=rider_feedback,
            driver_feedback=driver_feedback,
        )
        for index, rider_rating, driver_rating, rider_feedback, driver_feedback in _RATINGS
    )
    db.commit()
    logger.info("Loaded sample data: %d users, %d rides", len(users), len(rides))
    return True
