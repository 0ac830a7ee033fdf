from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from src.api import services
from src.api.db import get_db
from src.api.models.vehicle import Vehicle
from src.api.schemas.vehicle import VehicleCreateRequest, VehiclePublic

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


def _to_public(vehicle: Vehicle) -> VehiclePublic:
    return VehiclePublic(
        vehicle_id=vehicle.vehicle_id,
        driver_id=vehicle.driver_id,
        vehicle_type=vehicle.vehicle_type,
        vehicle_number=vehicle.vehicle_number,
        model=vehicle.model,
    )


@router.post(
    "",
    response_model=VehiclePublic,
    status_code=status.HTTP_201_CREATED,
    summary="Register a vehicle",
    description="Register a vehicle for a driver. The plate number must be unique.",
    operation_id="vehicles_create",
)
def create_vehicle(payload: VehicleCreateRequest, db: Session = Depends(get_db)) -> VehiclePublic:
    vehicle = services.create_vehicle(
        db,
        driver_id=payload.driver_id,
        vehicle_type=payload.vehicle_type,
        vehicle_number=payload.vehicle_number,
        model=payload.model,
    )
    return _to_public(vehicle)


@router.delete(
    "/{vehicle_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a vehicle",
    description="Rejected with 409 while rides still reference the vehicle.",
    operation_id="vehicles_delete",
)
def delete_vehicle(vehicle_id: int, db: Session = Depends(get_db)) -> Response:
    services.delete_vehicle(db, vehicle_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
