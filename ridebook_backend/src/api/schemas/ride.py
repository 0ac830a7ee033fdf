from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from src.api.models.ride import RideStatus


class RideCreateRequest(BaseModel):
    rider_id: int = Field(..., gt=0, description="Rider user id booking the ride.")
    driver_id: int = Field(..., gt=0, description="Driver user id assigned to the ride.")
    vehicle_id: int = Field(..., gt=0, description="Vehicle used; must belong to the driver.")
    pickup_location: str = Field(..., min_length=1, max_length=255, description="Pickup address or landmark.")
    dropoff_location: str = Field(..., min_length=1, max_length=255, description="Drop-off address or landmark.")
    fare: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, description="Fare in currency units.")
    distance_km: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, description="Trip distance in km.")


class RidePublic(BaseModel):
    ride_id: int = Field(..., description="Ride id.")
    rider_id: int = Field(..., description="Rider user id.")
    driver_id: int = Field(..., description="Driver user id.")
    vehicle_id: int = Field(..., description="Vehicle id.")
    pickup_location: str = Field(..., description="Pickup location.")
    dropoff_location: str = Field(..., description="Drop-off location.")
    fare: Decimal = Field(..., description="Fare.")
    distance_km: Decimal = Field(..., description="Distance in km.")
    ride_status: RideStatus = Field(..., description="Current ride status.")
    pickup_time: Optional[datetime] = Field(default=None, description="When the rider was picked up.")
    dropoff_time: Optional[datetime] = Field(default=None, description="When the rider was dropped off.")
    created_at: datetime = Field(..., description="When the ride was requested.")
    completed_at: Optional[datetime] = Field(default=None, description="When the ride was completed.")
