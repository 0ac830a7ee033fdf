"""Write services: lifecycle rules and translation of constraint violations."""

from decimal import Decimal

import pytest

from factories import make_trip, make_user, make_vehicle
from src.api import reports, services
from src.api.errors import (
    ConstraintViolationError,
    DuplicateRecordError,
    InvalidTransitionError,
    RecordNotFoundError,
    ReferenceViolationError,
    RoleMismatchError,
)
from src.api.models.payment import PaymentMode, PaymentStatus
from src.api.models.ride import RideStatus
from src.api.models.user import User, UserType
from src.api.models.vehicle import VehicleType


@pytest.fixture
def rider(db):
    return services.create_user(db, name="Rita Rider", email="rita@example.com", phone="9000000101", user_type=UserType.rider)


@pytest.fixture
def driver(db):
    return services.create_user(db, name="Dev Driver", email="dev@example.com", phone="9000000102", user_type=UserType.driver)


@pytest.fixture
def vehicle(db, driver):
    return services.create_vehicle(
        db,
        driver_id=driver.user_id,
        vehicle_type=VehicleType.hatchback,
        vehicle_number="KA05MN4321",
        model="Tata Tiago",
    )


@pytest.fixture
def ride(db, rider, driver, vehicle):
    return services.request_ride(
        db,
        rider_id=rider.user_id,
        driver_id=driver.user_id,
        vehicle_id=vehicle.vehicle_id,
        pickup_location="Central Station",
        dropoff_location="Tech Park",
        fare=Decimal("220.00"),
        distance_km=Decimal("12.40"),
    )


@pytest.mark.unit
class TestUsers:
    def test_create_user(self, rider):
        assert rider.user_id is not None
        assert rider.user_type == UserType.rider
        assert rider.created_at is not None

    def test_duplicate_email(self, db, rider):
        with pytest.raises(DuplicateRecordError):
            services.create_user(db, name="Other", email="rita@example.com", phone="9000000999", user_type=UserType.rider)

    def test_duplicate_phone(self, db, rider):
        with pytest.raises(DuplicateRecordError):
            services.create_user(db, name="Other", email="other@example.com", phone="9000000101", user_type=UserType.rider)

    def test_session_usable_after_rejected_insert(self, db, rider):
        with pytest.raises(DuplicateRecordError):
            services.create_user(db, name="Other", email="rita@example.com", phone="9000000999", user_type=UserType.rider)
        assert db.query(User).count() == 1
        services.create_user(db, name="Other", email="other@example.com", phone="9000000999", user_type=UserType.rider)
        assert db.query(User).count() == 2

    def test_write_is_committed(self, session_factory, rider):
        other = session_factory()
        try:
            assert other.get(User, rider.user_id).email == "rita@example.com"
        finally:
            other.close()

    def test_get_missing_user(self, db):
        with pytest.raises(RecordNotFoundError):
            services.get_user(db, 404)


@pytest.mark.unit
class TestVehicles:
    def test_only_drivers_own_vehicles(self, db, rider):
        with pytest.raises(RoleMismatchError):
            services.create_vehicle(
                db, driver_id=rider.user_id, vehicle_type=VehicleType.bike, vehicle_number="KA09ZZ0001", model="Pulsar"
            )

    def test_duplicate_plate(self, db, vehicle):
        other = services.create_user(db, name="Other", email="o@example.com", phone="9000000103", user_type=UserType.driver)
        with pytest.raises(DuplicateRecordError):
            services.create_vehicle(
                db, driver_id=other.user_id, vehicle_type=VehicleType.suv, vehicle_number="KA05MN4321", model="XUV700"
            )


@pytest.mark.unit
class TestRideLifecycle:
    def test_requested_ride(self, ride):
        assert ride.ride_status == RideStatus.requested
        assert ride.pickup_time is None
        assert ride.completed_at is None

    def test_start_then_complete(self, db, ride):
        started = services.start_ride(db, ride.ride_id)
        assert started.ride_status == RideStatus.ongoing
        assert started.pickup_time is not None

        done = services.complete_ride(db, ride.ride_id)
        assert done.ride_status == RideStatus.completed
        assert done.dropoff_time is not None
        assert done.completed_at is not None

    @pytest.mark.parametrize("started", [False, True])
    def test_cancel_from_requested_or_ongoing(self, db, ride, started):
        if started:
            services.start_ride(db, ride.ride_id)
        assert services.cancel_ride(db, ride.ride_id).ride_status == RideStatus.cancelled

    def test_cannot_complete_requested_ride(self, db, ride):
        with pytest.raises(InvalidTransitionError):
            services.complete_ride(db, ride.ride_id)

    @pytest.mark.parametrize("terminal", ["complete", "cancel"])
    def test_terminal_status_is_final(self, db, ride, terminal):
        services.start_ride(db, ride.ride_id)
        getattr(services, f"{terminal}_ride")(db, ride.ride_id)
        for move in (services.start_ride, services.complete_ride, services.cancel_ride):
            with pytest.raises(InvalidTransitionError):
                move(db, ride.ride_id)

    def test_rider_must_be_a_rider(self, db, driver, vehicle):
        with pytest.raises(RoleMismatchError):
            services.request_ride(
                db,
                rider_id=driver.user_id,
                driver_id=driver.user_id,
                vehicle_id=vehicle.vehicle_id,
                pickup_location="A",
                dropoff_location="B",
                fare=Decimal("1.00"),
                distance_km=Decimal("1.00"),
            )

    def test_vehicle_must_belong_to_driver(self, db, rider, vehicle):
        other = services.create_user(db, name="Other", email="o@example.com", phone="9000000103", user_type=UserType.driver)
        with pytest.raises(RoleMismatchError):
            services.request_ride(
                db,
                rider_id=rider.user_id,
                driver_id=other.user_id,
                vehicle_id=vehicle.vehicle_id,
                pickup_location="A",
                dropoff_location="B",
                fare=Decimal("1.00"),
                distance_km=Decimal("1.00"),
            )

    def test_negative_fare_rejected_by_table(self, db, rider, driver, vehicle):
        with pytest.raises(ConstraintViolationError):
            services.request_ride(
                db,
                rider_id=rider.user_id,
                driver_id=driver.user_id,
                vehicle_id=vehicle.vehicle_id,
                pickup_location="A",
                dropoff_location="B",
                fare=Decimal("-1.00"),
                distance_km=Decimal("1.00"),
            )

    def test_fare_and_distance_stored_in_cents(self, db, rider, driver, vehicle):
        ride = services.request_ride(
            db,
            rider_id=rider.user_id,
            driver_id=driver.user_id,
            vehicle_id=vehicle.vehicle_id,
            pickup_location="A",
            dropoff_location="B",
            fare=Decimal("10.005"),
            distance_km=Decimal("3.333"),
        )

        assert ride.fare == Decimal("10.01")
        assert ride.distance_km == Decimal("3.33")

    def test_missing_ride(self, db):
        with pytest.raises(RecordNotFoundError):
            services.start_ride(db, 12345)


@pytest.mark.unit
class TestPayments:
    def test_requires_terminal_ride(self, db, ride):
        with pytest.raises(InvalidTransitionError):
            services.record_payment(db, ride.ride_id, payment_mode=PaymentMode.cash)

    def test_defaults_to_fare_and_pending(self, db, ride):
        services.start_ride(db, ride.ride_id)
        services.complete_ride(db, ride.ride_id)

        payment = services.record_payment(db, ride.ride_id, payment_mode=PaymentMode.debit_card)

        assert Decimal(str(payment.amount)) == Decimal("220.00")
        assert payment.payment_status == PaymentStatus.pending
        assert payment.transaction_time is not None

    def test_cancelled_ride_can_be_charged(self, db, ride):
        services.cancel_ride(db, ride.ride_id)
        payment = services.record_payment(db, ride.ride_id, payment_mode=PaymentMode.wallet, amount=Decimal("30.00"))
        assert Decimal(str(payment.amount)) == Decimal("30.00")

    def test_amount_stored_in_cents(self, db, ride):
        services.cancel_ride(db, ride.ride_id)
        payment = services.record_payment(db, ride.ride_id, payment_mode=PaymentMode.cash, amount=Decimal("49.995"))
        assert payment.amount == Decimal("50.00")

    def test_one_payment_per_ride(self, db, ride):
        services.cancel_ride(db, ride.ride_id)
        services.record_payment(db, ride.ride_id, payment_mode=PaymentMode.cash)
        with pytest.raises(DuplicateRecordError):
            services.record_payment(db, ride.ride_id, payment_mode=PaymentMode.cash)

    @pytest.mark.parametrize("outcome", [PaymentStatus.completed, PaymentStatus.failed])
    def test_settle_pending_payment(self, db, ride, outcome):
        services.cancel_ride(db, ride.ride_id)
        payment = services.record_payment(db, ride.ride_id, payment_mode=PaymentMode.cash)

        settled = services.update_payment_status(db, payment.payment_id, outcome)

        assert settled.payment_status == outcome
        with pytest.raises(InvalidTransitionError):
            services.update_payment_status(db, payment.payment_id, PaymentStatus.completed)


@pytest.mark.unit
class TestRatings:
    def _complete(self, db, ride):
        services.start_ride(db, ride.ride_id)
        services.complete_ride(db, ride.ride_id)

    def test_requires_completed_ride(self, db, ride):
        services.cancel_ride(db, ride.ride_id)
        with pytest.raises(InvalidTransitionError):
            services.record_rating(db, ride.ride_id, rider_rating=Decimal("4.0"), driver_rating=Decimal("4.0"))

    @pytest.mark.parametrize("value", ["1.0", "5.0"])
    def test_boundaries_accepted(self, db, ride, value):
        self._complete(db, ride)
        rating = services.record_rating(db, ride.ride_id, rider_rating=Decimal(value), driver_rating=Decimal(value))
        assert rating.rating_id is not None

    @pytest.mark.parametrize("value", ["0.9", "5.1"])
    def test_out_of_range_rejected(self, db, ride, value):
        self._complete(db, ride)
        with pytest.raises(ConstraintViolationError):
            services.record_rating(db, ride.ride_id, rider_rating=Decimal("4.0"), driver_rating=Decimal(value))

    def test_ratings_stored_with_one_decimal(self, db, ride):
        self._complete(db, ride)
        rating = services.record_rating(db, ride.ride_id, rider_rating=Decimal("4.04"), driver_rating=Decimal("3.45"))

        assert rating.rider_rating == Decimal("4.0")
        assert rating.driver_rating == Decimal("3.5")
        # Reports filter and average on the stored value, not the submitted one.
        assert reports.negative_feedback(db) == []
        [best] = reports.highest_rated_driver(db)
        assert best["avg_driver_rating"] == Decimal("3.50")

    def test_one_rating_per_ride(self, db, ride):
        self._complete(db, ride)
        services.record_rating(db, ride.ride_id, rider_rating=Decimal("4.0"), driver_rating=Decimal("4.5"))
        with pytest.raises(DuplicateRecordError):
            services.record_rating(db, ride.ride_id, rider_rating=Decimal("3.0"), driver_rating=Decimal("3.0"))


@pytest.mark.unit
class TestDeletes:
    def test_referenced_rider_cannot_be_deleted(self, db, ride):
        with pytest.raises(ReferenceViolationError):
            services.delete_user(db, ride.rider_id)
        assert services.get_user(db, ride.rider_id) is not None

    def test_driver_with_vehicle_cannot_be_deleted(self, db, vehicle):
        with pytest.raises(ReferenceViolationError):
            services.delete_user(db, vehicle.driver_id)

    def test_referenced_vehicle_cannot_be_deleted(self, db, ride):
        with pytest.raises(ReferenceViolationError):
            services.delete_vehicle(db, ride.vehicle_id)

    def test_unreferenced_rows_can_be_deleted(self, db):
        driver = make_user(db, UserType.driver)
        car = make_vehicle(db, driver)
        db.commit()

        services.delete_vehicle(db, car.vehicle_id)
        services.delete_user(db, driver.user_id)

        with pytest.raises(RecordNotFoundError):
            services.get_user(db, driver.user_id)

    def test_factory_trip_is_protected(self, db):
        trip = make_trip(db)
        db.commit()
        with pytest.raises(ReferenceViolationError):
            services.delete_vehicle(db, trip.vehicle_id)
