"""
Domain errors raised by the write services and the report registry.

Each error carries the HTTP status the API answers with, so routers can let
them propagate to the single exception handler registered in main.py.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

# SQLSTATE integrity classes (PostgreSQL, also reported by MySQL drivers).
_SQLSTATE_UNIQUE = "23505"
_SQLSTATE_FOREIGN_KEY = "23503"
_SQLSTATE_CHECK = "23514"
_SQLSTATE_NOT_NULL = "23502"


class RideBookError(Exception):
    """Base class for all domain errors."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class RecordNotFoundError(RideBookError):
    status_code = 404


class DuplicateRecordError(RideBookError):
    """A unique column (email, phone, vehicle_number, ride reference) already holds the value."""

    status_code = 409


class ReferenceViolationError(RideBookError):
    """A foreign key points at a missing row, or a referenced row is being removed."""

    status_code = 409


class ConstraintViolationError(RideBookError):
    """An enumeration, CHECK or NOT NULL rule rejected the statement."""

    status_code = 422


class InvalidTransitionError(RideBookError):
    """A ride or payment lifecycle rule forbids the requested change."""

    status_code = 409


class RoleMismatchError(RideBookError):
    """A referenced user or vehicle does not play the role the operation needs."""

    status_code = 422


class UnknownReportError(RideBookError):
    status_code = 404


def _sqlstate(exc: IntegrityError) -> str | None:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


# PUBLIC_INTERFACE
def translate_integrity_error(exc: IntegrityError) -> RideBookError:
    """
    Map an engine IntegrityError to the matching domain error.

    SQLSTATE is used when the driver exposes it (psycopg); SQLite only reports
    a message, so the message text is inspected as a fallback.
    """
    code = _sqlstate(exc)
    message = str(exc.orig)
    lowered = message.lower()

    if code == _SQLSTATE_UNIQUE or "unique constraint" in lowered or "duplicate" in lowered:
        error: RideBookError = DuplicateRecordError(f"Duplicate value violates a unique constraint: {message}")
    elif code == _SQLSTATE_FOREIGN_KEY or "foreign key" in lowered:
        error = ReferenceViolationError(f"Foreign key constraint failed: {message}")
    elif code in (_SQLSTATE_CHECK, _SQLSTATE_NOT_NULL) or "check constraint" in lowered or "not null" in lowered:
        error = ConstraintViolationError(f"Value rejected by a table constraint: {message}")
    else:
        error = ConstraintViolationError(f"Integrity error: {message}")

    logger.warning("Statement rejected: %s", error.detail)
    return error
