from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Deterministic constraint names so DDL reads the same on every engine.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

CENTS = Decimal("0.01")
TENTHS = Decimal("0.1")


def to_scale(value: Any, exponent: Decimal) -> Decimal | None:
    """
    Round a NUMERIC column value to its declared scale before it is stored.

    SQLite keeps whatever precision it is given; PostgreSQL and MySQL round
    half up to the column scale. Rounding here gives every engine the stored
    value PostgreSQL would keep.
    """
    if value is None:
        return None
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


class Base(DeclarativeBase):
    """Declarative base shared by all RideBook tables."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
