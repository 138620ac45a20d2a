from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.engine import Engine

from wild_oasis.db.readers.guests import list_guests
from wild_oasis.dependencies import get_db_engine
from wild_oasis.errors import HotelError
from wild_oasis.routes._helpers import changed_fields, dump, dump_bookings, to_http_exception
from wild_oasis.schemas.guests import (
    GUEST_CLEARABLE_FIELDS,
    GuestCreatePayload,
    GuestRead,
    GuestUpdatePayload,
)
from wild_oasis.services.activity import guest_bookings
from wild_oasis.services.guests import (
    create_guest,
    delete_guest,
    find_guest_by_email,
    get_guest,
    update_guest,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("", status_code=status.HTTP_200_OK)
def list_guests_endpoint(engine: Engine = Depends(get_db_engine)) -> dict[str, Any]:
    try:
        with engine.connect() as conn:
            guests = list_guests(conn)
        return {"status": True, "guests": [dump(GuestRead, g) for g in guests]}
    except Exception as e:
        logger.exception("guests_list_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/email/{email}", status_code=status.HTTP_200_OK)
def get_guest_by_email_endpoint(
    email: str, engine: Engine = Depends(get_db_engine)
) -> dict[str, Any]:
    try:
        with engine.connect() as conn:
            guest = find_guest_by_email(conn, email)
        return {"status": True, "guest": dump(GuestRead, guest)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("guest_email_lookup_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{guest_id}", status_code=status.HTTP_200_OK)
def get_guest_endpoint(guest_id: str, engine: Engine = Depends(get_db_engine)) -> dict[str, Any]:
    try:
        with engine.connect() as conn:
            guest = get_guest(conn, guest_id)
        return {"status": True, "guest": dump(GuestRead, guest)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("guest_fetch_failed", guest_id=guest_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{guest_id}/bookings", status_code=status.HTTP_200_OK)
def guest_bookings_endpoint(
    guest_id: str, engine: Engine = Depends(get_db_engine)
) -> dict[str, Any]:
    """All bookings of a guest, newest first, with cabins attached."""
    try:
        with engine.connect() as conn:
            bookings = guest_bookings(conn, guest_id)
        return {"status": True, "bookings": dump_bookings(bookings)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("guest_bookings_failed", guest_id=guest_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_guest_endpoint(
    payload: GuestCreatePayload, engine: Engine = Depends(get_db_engine)
) -> dict[str, Any]:
    try:
        with engine.begin() as conn:
            guest = create_guest(conn, payload.model_dump())
        return {"status": True, "guest": dump(GuestRead, guest)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("guest_creation_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/{guest_id}", status_code=status.HTTP_200_OK)
def update_guest_endpoint(
    guest_id: str, payload: GuestUpdatePayload, engine: Engine = Depends(get_db_engine)
) -> dict[str, Any]:
    try:
        with engine.begin() as conn:
            changes = changed_fields(payload, GUEST_CLEARABLE_FIELDS)
            guest = update_guest(conn, guest_id, changes)
        return {"status": True, "guest": dump(GuestRead, guest)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("guest_update_failed", guest_id=guest_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/{guest_id}", status_code=status.HTTP_200_OK)
def delete_guest_endpoint(guest_id: str, engine: Engine = Depends(get_db_engine)) -> dict[str, Any]:
    """Delete a guest. The guest's bookings are deleted first, in the same transaction."""
    try:
        with engine.begin() as conn:
            delete_guest(conn, guest_id)
        return {"status": True, "message": "Guest deleted successfully"}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("guest_deletion_failed", guest_id=guest_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")
