from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from src.api import services
from src.api.db import get_db
from src.api.models.user import User
from src.api.schemas.user import UserCreateRequest, UserPublic

router = APIRouter(prefix="/users", tags=["users"])


def _to_public(user: User) -> UserPublic:
    """Convert ORM User row to public schema."""
    return UserPublic(
        user_id=user.user_id,
        name=user.name,
        email=user.email,
        phone=user.phone,
        user_type=user.user_type,
        created_at=user.created_at,
    )


@router.post(
    "",
    response_model=UserPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    description="Register a rider or driver. Email and phone must be unique.",
    operation_id="users_create",
)
def create_user(payload: UserCreateRequest, db: Session = Depends(get_db)) -> UserPublic:
    """
    Create a user.

    Errors:
    - 409 if the email or phone is already registered.
    """
    user = services.create_user(
        db,
        name=payload.name,
        email=str(payload.email),
        phone=payload.phone,
        user_type=payload.user_type,
    )
    return _to_public(user)


@router.get(
    "/{user_id}",
    response_model=UserPublic,
    summary="Get user by id",
    operation_id="users_get_by_id",
)
def get_user(user_id: int, db: Session = Depends(get_db)) -> UserPublic:
    return _to_public(services.get_user(db, user_id))


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
    description="Rejected with 409 while vehicles or rides still reference the user.",
    operation_id="users_delete",
)
def delete_user(user_id: int, db: Session = Depends(get_db)) -> Response:
    services.delete_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
