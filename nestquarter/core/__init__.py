"""Core utilities: exceptions, security, locking and middleware."""

from nestquarter.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    ConflictError,
    DatesNotAvailable,
    InvalidBookingStatus,
    NotFoundError,
    PropertyNotAvailable,
    StayLengthError,
)
from nestquarter.core.security import create_access_token, verify_token

__all__ = [
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "BadRequestError",
    "ConflictError",
    "DatesNotAvailable",
    "InvalidBookingStatus",
    "NotFoundError",
    "PropertyNotAvailable",
    "StayLengthError",
    "create_access_token",
    "verify_token",
]
