"""
Read-only reporting queries over the ride-booking schema.

Every report is a plain SELECT built with SQLAlchemy Core and returns a list of
row dicts whose keys are the result column names. Top-1 reports return at most
one row; ties on the ranked value go to the smallest id (or, for pickup
locations, the alphabetically first location) so results are stable across
engines.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, Dict, List

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session, aliased

from src.api.errors import UnknownReportError
from src.api.models.base import CENTS, to_scale
from src.api.models.payment import Payment, PaymentStatus
from src.api.models.rating import Rating
from src.api.models.ride import Ride, RideStatus
from src.api.models.user import User, UserType
from src.api.models.vehicle import Vehicle

Row = Dict[str, Any]


def _two_places(value: Any) -> Decimal | None:
    """Quantize an engine aggregate (float on SQLite, Decimal elsewhere) to 2 decimals."""
    return to_scale(value, CENTS)


def _rows(session: Session, stmt: Select) -> List[Row]:
    return [dict(row) for row in session.execute(stmt).mappings().all()]


# PUBLIC_INTERFACE
def user_counts_by_type(session: Session) -> List[Row]:
    """Number of users per user_type."""
    total = func.count(User.user_id).label("total_users")
    stmt = (
        select(User.user_type, total)
        .group_by(User.user_type)
        .order_by(total.desc(), User.user_type)
    )
    return _rows(session, stmt)


# PUBLIC_INTERFACE
def drivers_with_vehicles(session: Session) -> List[Row]:
    """Every driver with their vehicles; drivers without a vehicle carry null vehicle columns."""
    stmt = (
        select(
            User.user_id,
            User.name,
            Vehicle.vehicle_id,
            Vehicle.vehicle_type,
            Vehicle.vehicle_number,
            Vehicle.model,
        )
        .select_from(User)
        .outerjoin(Vehicle, Vehicle.driver_id == User.user_id)
        .where(User.user_type == UserType.driver)
        .order_by(User.user_id, Vehicle.vehicle_id)
    )
    return _rows(session, stmt)


# PUBLIC_INTERFACE
def riders_without_rides(session: Session) -> List[Row]:
    """Riders that have never booked a ride."""
    stmt = (
        select(User.user_id, User.name, User.email)
        .select_from(User)
        .outerjoin(Ride, Ride.rider_id == User.user_id)
        .where(User.user_type == UserType.rider, Ride.ride_id.is_(None))
        .order_by(User.user_id)
    )
    return _rows(session, stmt)


# PUBLIC_INTERFACE
def ride_counts_by_status(session: Session) -> List[Row]:
    total = func.count(Ride.ride_id).label("total_rides")
    stmt = (
        select(Ride.ride_status, total)
        .group_by(Ride.ride_status)
        .order_by(total.desc(), Ride.ride_status)
    )
    return _rows(session, stmt)


# PUBLIC_INTERFACE
def completed_ride_averages(session: Session) -> List[Row]:
    """Average fare and distance of completed rides, rounded to 2 decimals."""
    stmt = select(
        func.round(func.avg(Ride.fare), 2).label("avg_fare"),
        func.round(func.avg(Ride.distance_km), 2).label("avg_distance_km"),
    ).where(Ride.ride_status == RideStatus.completed)
    row = session.execute(stmt).mappings().one()
    return [
        {
            "avg_fare": _two_places(row["avg_fare"]),
            "avg_distance_km": _two_places(row["avg_distance_km"]),
        }
    ]


# PUBLIC_INTERFACE
def top_driver_by_completed_rides(session: Session) -> List[Row]:
    """The driver with the most completed rides (single row, or none)."""
    completed = func.count(Ride.ride_id).label("completed_rides")
    stmt = (
        select(Ride.driver_id, User.name.label("driver_name"), completed)
        .select_from(Ride)
        .join(User, User.user_id == Ride.driver_id)
        .where(Ride.ride_status == RideStatus.completed)
        .group_by(Ride.driver_id, User.name)
        .order_by(completed.desc(), Ride.driver_id)
        .limit(1)
    )
    return _rows(session, stmt)


# PUBLIC_INTERFACE
def most_popular_pickup_location(session: Session) -> List[Row]:
    """Pickup location used by the most rides, whatever their status."""
    total = func.count(Ride.ride_id).label("total_rides")
    stmt = (
        select(Ride.pickup_location, total)
        .group_by(Ride.pickup_location)
        .order_by(total.desc(), Ride.pickup_location)
        .limit(1)
    )
    return _rows(session, stmt)


# PUBLIC_INTERFACE
def total_revenue(session: Session) -> List[Row]:
    """Sum of completed payments; 0.00 when nothing has been collected."""
    stmt = select(func.coalesce(func.sum(Payment.amount), 0).label("total_revenue")).where(
        Payment.payment_status == PaymentStatus.completed
    )
    value = session.execute(stmt).scalar_one()
    return [{"total_revenue": _two_places(value)}]


# PUBLIC_INTERFACE
def pending_payments(session: Session) -> List[Row]:
    """Payments still pending, with the name of the rider who owes them."""
    stmt = (
        select(
            Payment.payment_id,
            Payment.ride_id,
            User.name.label("rider_name"),
            Payment.amount,
            Payment.payment_mode,
        )
        .select_from(Payment)
        .join(Ride, Ride.ride_id == Payment.ride_id)
        .join(User, User.user_id == Ride.rider_id)
        .where(Payment.payment_status == PaymentStatus.pending)
        .order_by(Payment.payment_id)
    )
    return _rows(session, stmt)


# PUBLIC_INTERFACE
def highest_rated_driver(session: Session) -> List[Row]:
    """Driver with the best average driver_rating (single row, or none)."""
    average = func.round(func.avg(Rating.driver_rating), 2).label("avg_driver_rating")
    stmt = (
        select(Ride.driver_id, User.name.label("driver_name"), average)
        .select_from(Rating)
        .join(Ride, Ride.ride_id == Rating.ride_id)
        .join(User, User.user_id == Ride.driver_id)
        .group_by(Ride.driver_id, User.name)
        .order_by(average.desc(), Ride.driver_id)
        .limit(1)
    )
    rows = _rows(session, stmt)
    for row in rows:
        row["avg_driver_rating"] = _two_places(row["avg_driver_rating"])
    return rows


# PUBLIC_INTERFACE
def negative_feedback(session: Session, threshold: Decimal = Decimal("3.5")) -> List[Row]:
    """Rated rides where either side scored below the threshold (3.5)."""
    rider = aliased(User, name="rider")
    driver = aliased(User, name="driver")
    stmt = (
        select(
            Rating.ride_id,
            rider.name.label("rider_name"),
            driver.name.label("driver_name"),
            Rating.rider_rating,
            Rating.driver_rating,
            Rating.rider_feedback,
            Rating.driver_feedback,
        )
        .select_from(Rating)
        .join(Ride, Ride.ride_id == Rating.ride_id)
        .join(rider, rider.user_id == Ride.rider_id)
        .join(driver, driver.user_id == Ride.driver_id)
        .where(or_(Rating.rider_rating < threshold, Rating.driver_rating < threshold))
        .order_by(Rating.ride_id)
    )
    return _rows(session, stmt)


ReportFn = Callable[[Session], List[Row]]

# Ordered registry of all reports, exposed by name through the API.
REPORTS: Dict[str, ReportFn] = {
    "user_counts_by_type": user_counts_by_type,
    "drivers_with_vehicles": drivers_with_vehicles,
    "riders_without_rides": riders_without_rides,
    "ride_counts_by_status": ride_counts_by_status,
    "completed_ride_averages": completed_ride_averages,
    "top_driver_by_completed_rides": top_driver_by_completed_rides,
    "most_popular_pickup_location": most_popular_pickup_location,
    "total_revenue": total_revenue,
    "pending_payments": pending_payments,
    "highest_rated_driver": highest_rated_driver,
    "negative_feedback": negative_feedback,
}


# PUBLIC_INTERFACE
def run_report(session: Session, name: str) -> List[Row]:
    """Run a report by name, raising UnknownReportError for unregistered names."""
    report = REPORTS.get(name)
    if report is None:
        raise UnknownReportError(f"Unknown report: {name}.")
    return report(session)
