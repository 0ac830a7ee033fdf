import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.api.models.base import Base


class UserType(str, enum.Enum):
    """User types supported by the application."""
    rider = "rider"
    driver = "driver"


class User(Base):
    """
    ORM model for the 'users' table.

    Vehicles and rides reference users with ON DELETE/UPDATE RESTRICT, so a
    user that is still referenced cannot be removed.
    """
    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    phone: Mapped[str] = mapped_column(String(15), unique=True, nullable=False)
    user_type: Mapped[UserType] = mapped_column(
        Enum(UserType, name="user_type", native_enum=False, create_constraint=True, length=10),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
