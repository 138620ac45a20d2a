"""
Internal helper functions for route handlers.

Translation of domain errors to HTTP responses and serialization of rows into
camelCase response bodies live here to keep the handlers short.
"""

from __future__ import annotations

from typing import Any, Iterable

from fastapi import HTTPException
from pydantic import BaseModel

from wild_oasis.errors import HotelError
from wild_oasis.schemas.bookings import BookingRead


def to_http_exception(error: HotelError) -> HTTPException:
    """
    Convert a domain error into an HTTPException with the error's status.

    Args:
        error: Raised domain error

    Returns:
        HTTPException: Ready to raise, detail is the error's message
    """
    return HTTPException(status_code=error.status_code, detail=error.message)


def changed_fields(payload: BaseModel, nullable: Iterable[str] = ()) -> dict[str, Any]:
    """
    Return the fields the client sent.

    An explicit null is kept only for fields named in `nullable`, so it clears
    that column; for every other field a null is ignored.
    """
    clearable = set(nullable)
    return {
        k: v
        for k, v in payload.model_dump(exclude_unset=True).items()
        if v is not None or k in clearable
    }


def dump(schema: type[BaseModel], row: dict[str, Any]) -> dict[str, Any]:
    return schema.model_validate(row).model_dump(by_alias=True, mode="json")


def dump_bookings(rows: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    return [dump(BookingRead, row) for row in rows]
