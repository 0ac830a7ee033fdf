from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.api import services
from src.api.db import get_db
from src.api.models.rating import Rating
from src.api.schemas.rating import RatingPublic

router = APIRouter(prefix="/ratings", tags=["ratings"])


def to_public(rating: Rating) -> RatingPublic:
    """Convert ORM Rating row to public schema."""
    return RatingPublic(
        rating_id=rating.rating_id,
        ride_id=rating.ride_id,
        rider_rating=rating.rider_rating,
        driver_rating=rating.driver_rating,
        rider_feedback=rating.rider_feedback,
        driver_feedback=rating.driver_feedback,
    )


@router.get(
    "/{rating_id}",
    response_model=RatingPublic,
    summary="Get rating by id",
    operation_id="ratings_get_by_id",
)
def get_rating(rating_id: int, db: Session = Depends(get_db)) -> RatingPublic:
    return to_public(services.get_rating(db, rating_id))
