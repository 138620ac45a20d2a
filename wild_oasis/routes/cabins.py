from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.engine import Engine

from wild_oasis.db.readers.cabins import list_cabins
from wild_oasis.dependencies import get_db_engine
from wild_oasis.errors import HotelError
from wild_oasis.routes._helpers import changed_fields, dump, to_http_exception
from wild_oasis.schemas.cabins import CabinCreatePayload, CabinRead, CabinUpdatePayload
from wild_oasis.services.cabins import create_cabin, delete_cabin, get_cabin, update_cabin

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("", status_code=status.HTTP_200_OK)
def list_cabins_endpoint(engine: Engine = Depends(get_db_engine)) -> dict[str, Any]:
    try:
        with engine.connect() as conn:
            cabins = list_cabins(conn)
        return {"status": True, "cabins": [dump(CabinRead, c) for c in cabins]}
    except Exception as e:
        logger.exception("cabins_list_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{cabin_id}", status_code=status.HTTP_200_OK)
def get_cabin_endpoint(cabin_id: str, engine: Engine = Depends(get_db_engine)) -> dict[str, Any]:
    try:
        with engine.connect() as conn:
            cabin = get_cabin(conn, cabin_id)
        return {"status": True, "cabin": dump(CabinRead, cabin)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("cabin_fetch_failed", cabin_id=cabin_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_cabin_endpoint(
    payload: CabinCreatePayload, engine: Engine = Depends(get_db_engine)
) -> dict[str, Any]:
    try:
        with engine.begin() as conn:
            cabin = create_cabin(conn, payload.model_dump())
        return {"status": True, "cabin": dump(CabinRead, cabin)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("cabin_creation_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/{cabin_id}", status_code=status.HTTP_200_OK)
def update_cabin_endpoint(
    cabin_id: str, payload: CabinUpdatePayload, engine: Engine = Depends(get_db_engine)
) -> dict[str, Any]:
    try:
        with engine.begin() as conn:
            cabin = update_cabin(conn, cabin_id, changed_fields(payload))
        return {"status": True, "cabin": dump(CabinRead, cabin)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("cabin_update_failed", cabin_id=cabin_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/{cabin_id}", status_code=status.HTTP_200_OK)
def delete_cabin_endpoint(cabin_id: str, engine: Engine = Depends(get_db_engine)) -> dict[str, Any]:
    """
    Delete a cabin. Its bookings are deleted first, in the same transaction.
    """
    try:
        with engine.begin() as conn:
            delete_cabin(conn, cabin_id)
        return {"status": True, "message": "Cabin deleted successfully"}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("cabin_deletion_failed", cabin_id=cabin_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")
