"""
Domain error taxonomy.

Services raise these exceptions; route handlers translate them into
HTTPException responses using the status_code carried by each class.
"""

from __future__ import annotations


class HotelError(Exception):
    """Base class for client-facing booking errors."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(HotelError):
    """An entity identifier did not resolve."""

    status_code = 404


class InvalidInputError(HotelError):
    """Malformed identifier, unparseable date or missing required field."""


class InvalidDateRangeError(InvalidInputError):
    pass


class InvalidQuantityError(InvalidInputError):
    pass


class CapacityExceededError(HotelError):
    pass


class InvalidStatusError(HotelError):
    pass


class ConflictError(HotelError):
    """Uniqueness violation or overlapping booking."""

    status_code = 409
