from pydantic import BaseModel, Field

from src.api.models.vehicle import VehicleType


class VehicleCreateRequest(BaseModel):
    driver_id: int = Field(..., gt=0, description="Owning driver's user id.")
    vehicle_type: VehicleType = Field(..., description="One of sedan, suv, hatchback, bike.")
    vehicle_number: str = Field(..., min_length=1, max_length=20, description="Plate number (globally unique).")
    model: str = Field(..., min_length=1, max_length=50, description="Vehicle model name.")


class VehiclePublic(BaseModel):
    vehicle_id: int = Field(..., description="Vehicle id.")
    driver_id: int = Field(..., description="Owning driver's user id.")
    vehicle_type: VehicleType = Field(..., description="Vehicle type.")
    vehicle_number: str = Field(..., description="Plate number.")
    model: str = Field(..., description="Vehicle model name.")
