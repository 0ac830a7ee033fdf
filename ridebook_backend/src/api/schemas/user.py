from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from src.api.models.user import UserType


class UserCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Full name of the user")
    email: EmailStr = Field(..., description="Unique email address")
    phone: str = Field(..., min_length=5, max_length=15, pattern=r"^\+?[0-9]+$", description="Unique phone number")
    user_type: UserType = Field(..., description="User type: rider or driver")


class UserPublic(BaseModel):
    user_id: int = Field(..., description="User id")
    name: str = Field(..., description="Full name")
    email: EmailStr = Field(..., description="Email address")
    phone: str = Field(..., description="Phone number")
    user_type: UserType = Field(..., description="User type: rider or driver")
    created_at: datetime = Field(..., description="Account creation timestamp")
