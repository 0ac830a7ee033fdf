from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class RatingCreateRequest(BaseModel):
    rider_rating: Decimal = Field(..., ge=1, le=5, decimal_places=1, description="Score given to the rider (1.0-5.0).")
    driver_rating: Decimal = Field(..., ge=1, le=5, decimal_places=1, description="Score given to the driver (1.0-5.0).")
    rider_feedback: Optional[str] = Field(default=None, max_length=2000, description="Feedback about the rider.")
    driver_feedback: Optional[str] = Field(default=None, max_length=2000, description="Feedback about the driver.")


class RatingPublic(BaseModel):
    rating_id: int = Field(..., description="Rating id.")
    ride_id: int = Field(..., description="Rated ride id.")
    rider_rating: Decimal = Field(..., description="Score given to the rider.")
    driver_rating: Decimal = Field(..., description="Score given to the driver.")
    rider_feedback: Optional[str] = Field(default=None, description="Feedback about the rider.")
    driver_feedback: Optional[str] = Field(default=None, description="Feedback about the driver.")
