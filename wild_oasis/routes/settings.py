from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.engine import Engine

from wild_oasis.dependencies import get_db_engine
from wild_oasis.errors import HotelError
from wild_oasis.routes._helpers import changed_fields, dump, to_http_exception
from wild_oasis.schemas.settings import SettingsPayload, SettingsRead, SettingsUpdatePayload
from wild_oasis.services.settings import (
    SettingsResult,
    create_settings,
    get_settings_or_default,
    reset_settings,
    update_settings,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


def _dump_settings(result: SettingsResult) -> dict[str, Any]:
    return dump(SettingsRead, {**result.values, "source": result.source})


@router.get("", status_code=status.HTTP_200_OK)
def get_settings_endpoint(engine: Engine = Depends(get_db_engine)) -> dict[str, Any]:
    """
    Current settings, or the built-in defaults when none were saved.

    The defaults are not persisted by this call; settings.source tells which
    one the client got.
    """
    try:
        with engine.connect() as conn:
            result = get_settings_or_default(conn)
        return {"status": True, "settings": _dump_settings(result)}
    except Exception as e:
        logger.exception("settings_fetch_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_settings_endpoint(
    payload: SettingsPayload, engine: Engine = Depends(get_db_engine)
) -> dict[str, Any]:
    try:
        with engine.begin() as conn:
            result = create_settings(conn, payload.model_dump())
        return {"status": True, "settings": _dump_settings(result)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("settings_creation_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("", status_code=status.HTTP_200_OK)
def update_settings_endpoint(
    payload: SettingsUpdatePayload, engine: Engine = Depends(get_db_engine)
) -> dict[str, Any]:
    try:
        with engine.begin() as conn:
            result = update_settings(conn, changed_fields(payload))
        return {"status": True, "settings": _dump_settings(result)}
    except HotelError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("settings_update_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/reset", status_code=status.HTTP_200_OK)
def reset_settings_endpoint(engine: Engine = Depends(get_db_engine)) -> dict[str, Any]:
    try:
        with engine.begin() as conn:
            result = reset_settings(conn)
        return {
            "status": True,
            "message": "Settings have been reset to default",
            "settings": _dump_settings(result),
        }
    except Exception as e:
        logger.exception("settings_reset_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")
