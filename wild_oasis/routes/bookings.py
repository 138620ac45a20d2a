from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.engine import Engine

from wild_oasis.config import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_PRICING_MODE,
    STRICT_OVERLAP_CHECK,
    STRICT_STATUS_TRANSITIONS,
)
from wild_oasis.dependencies import get_db_engine
from wild_oasis.errors import HotelError
from wild_oasis.routes._helpers import changed_fields, dump, dump_bookings, to_http_exception
from wild_oasis.schemas.bookings import (
    BOOKING_CLEARABLE_FIELDS,
    BookingCreatePayload,
    BookingDates,
    BookingRead,
    BookingStatusPayload,
    BookingUpdatePayload,
    PaymentStatusPayload,
)
from wild_oasis.services import activity
from wild_oasis.services.bookings import (
    TransitionPolicy,
    create_booking,
    delete_booking,
    get_booking,
    list_bookings,
    update_booking,
    update_payment_status,
    update_status,
)
from wild_oasis.services.pricing import DEFAULT_BREAKFAST_PRICE, PricingMode
from wild_oasis.services.settings import get_settings_or_default

logger = structlog.get_logger(__name__)
router = APIRouter()


def _transition_policy() -> TransitionPolicy:
    return TransitionPolicy.STRICT if STRICT_STATUS_TRANSITIONS else TransitionPolicy.PERMISSIVE


@router.get("", status_code=status.HTTP_200_OK)
def list_bookings_endpoint(
    booking_status: Optional[str] = Query(None, alias="status"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    page: int = Query(1),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    List bookings with optional status filter, sorting and pagination.

    Args:
        booking_status: Only bookings in this status
        sort_by: camelCase field to sort by (default createdAt, newest first)
        sort_order: "desc" for descending, anything else ascending
        page: 1-based page number
        limit: Page size

    Returns:
        dict: bookings (cabin and guest expanded), total, page, limit, totalPages
    """
    try:
        with engine.connect() as conn:
            result = list_bookings(
                conn,
                status=booking_status,
                sort_by=sort_by,
                sort_order=sort_order,
                page=page,
                limit=limit,
            )
        return {
            "status": True,
            "bookings": dump_bookings(result["bookings"]),
            "total": result["total"],
            "page": result["page"],
            "limit": result["limit"],
            "totalPages": result["total_pages"],
        }
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("bookings_list_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/after-date", status_code=status.HTTP_200_OK)
def bookings_after_date_endpoint(
    date: Optional[str] = Query(None, description="ISO-8601 date, e.g. 2025-10-01T00:00:00Z"),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Bookings created between the given date and the end of today (UTC).
    """
    try:
        with engine.connect() as conn:
            bookings = activity.bookings_created_after(conn, date)
        return {"status": True, "bookings": dump_bookings(bookings)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("bookings_after_date_failed", date=date, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/stays-after-date", status_code=status.HTTP_200_OK)
def stays_after_date_endpoint(
    date: Optional[str] = Query(None, description="ISO-8601 date, e.g. 2025-10-01T00:00:00Z"),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Checked-in and checked-out stays that started between the date and today.
    """
    try:
        with engine.connect() as conn:
            stays = activity.stays_after(conn, date)
        return {"status": True, "stays": dump_bookings(stays)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("stays_after_date_failed", date=date, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/stays-today-activity", status_code=status.HTTP_200_OK)
def today_activity_endpoint(engine: Engine = Depends(get_db_engine)) -> dict[str, Any]:
    """
    Today's arrivals (unconfirmed/confirmed starting today) and departures
    (checked-in ending today), each with its guest.
    """
    try:
        with engine.connect() as conn:
            activities = activity.today_activity(conn)
        return {"status": True, "activities": dump_bookings(activities)}
    except Exception as e:
        logger.exception("today_activity_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/guest/{guest_id}/reservations", status_code=status.HTTP_200_OK)
def guest_reservations_endpoint(
    guest_id: str, engine: Engine = Depends(get_db_engine)
) -> dict[str, Any]:
    """Pending (unconfirmed) bookings of a guest."""
    try:
        with engine.connect() as conn:
            reservations = activity.reservations_for_guest(conn, guest_id)
        return {"status": True, "reservations": dump_bookings(reservations)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("guest_reservations_failed", guest_id=guest_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{cabin_id}/dates", status_code=status.HTTP_200_OK)
def cabin_dates_endpoint(cabin_id: str, engine: Engine = Depends(get_db_engine)) -> dict[str, Any]:
    """Start/end dates of every booking of a cabin, for availability calendars."""
    try:
        with engine.connect() as conn:
            dates = activity.dates_for_cabin(conn, cabin_id)
        return {"status": True, "dates": [dump(BookingDates, d) for d in dates]}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("cabin_dates_failed", cabin_id=cabin_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{booking_id}", status_code=status.HTTP_200_OK)
def get_booking_endpoint(booking_id: str, engine: Engine = Depends(get_db_engine)) -> dict[str, Any]:
    """Single booking with cabin and guest expanded."""
    try:
        with engine.connect() as conn:
            booking = get_booking(conn, booking_id)
        return {"status": True, "booking": dump(BookingRead, booking)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("booking_fetch_failed", booking_id=booking_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_booking_endpoint(
    payload: BookingCreatePayload,
    pricing: Optional[PricingMode] = Query(None, description="trust or derive"),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Create a booking.

    In "trust" mode the caller's numNights, cabinPrice and totalPrice are
    stored after range checks. In "derive" mode they are computed from the
    dates, the cabin rate and the configured breakfast price.

    Args:
        payload: Booking fields
        pricing: Pricing mode override (defaults to DEFAULT_PRICING_MODE)

    Returns:
        dict: The created booking with cabin and guest expanded
    """
    mode = pricing or PricingMode(DEFAULT_PRICING_MODE)
    try:
        with engine.begin() as conn:
            breakfast_price = DEFAULT_BREAKFAST_PRICE
            if mode == PricingMode.DERIVE:
                breakfast_price = get_settings_or_default(conn).values["breakfast_price"]
            booking = create_booking(
                conn,
                payload.model_dump(),
                mode=mode,
                breakfast_price=breakfast_price,
                strict_overlap=STRICT_OVERLAP_CHECK,
            )
        return {"status": True, "booking": dump(BookingRead, booking)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("booking_creation_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/{booking_id}/status", status_code=status.HTTP_200_OK)
def update_status_endpoint(
    booking_id: str,
    payload: BookingStatusPayload,
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """Change a booking's status to one of the four enumerated values."""
    try:
        with engine.begin() as conn:
            booking = update_status(conn, booking_id, payload.status, policy=_transition_policy())
        return {"status": True, "booking": dump(BookingRead, booking)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("booking_status_update_failed", booking_id=booking_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/{booking_id}/payment-status", status_code=status.HTTP_200_OK)
def update_payment_status_endpoint(
    booking_id: str,
    payload: PaymentStatusPayload,
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """Record isPaid, paymentIntentId and/or status; omitted fields are untouched."""
    try:
        with engine.begin() as conn:
            booking = update_payment_status(
                conn,
                booking_id,
                is_paid=payload.is_paid,
                payment_intent_id=payload.payment_intent_id,
                status=payload.status,
                policy=_transition_policy(),
            )
        return {"status": True, "booking": dump(BookingRead, booking)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("booking_payment_update_failed", booking_id=booking_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/{booking_id}", status_code=status.HTTP_200_OK)
def update_booking_endpoint(
    booking_id: str,
    payload: BookingUpdatePayload,
    engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """Generic partial update; changed cabin/guest ids are re-validated."""
    try:
        with engine.begin() as conn:
            changes = changed_fields(payload, BOOKING_CLEARABLE_FIELDS)
            booking = update_booking(conn, booking_id, changes)
        return {"status": True, "booking": dump(BookingRead, booking)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("booking_update_failed", booking_id=booking_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/{booking_id}", status_code=status.HTTP_200_OK)
def delete_booking_endpoint(
    booking_id: str, engine: Engine = Depends(get_db_engine)
) -> dict[str, Any]:
    """Permanently delete a booking regardless of its status."""
    try:
        with engine.begin() as conn:
            delete_booking(conn, booking_id)
        return {"status": True, "message": "Booking deleted successfully"}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("booking_deletion_failed", booking_id=booking_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")
