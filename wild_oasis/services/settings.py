"""
Singleton business settings with an explicit get-or-default lookup.

get_settings_or_default() never writes: when no row exists it returns the
built-in defaults tagged as "default". reset_settings() is the only path that
persists the defaults.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Literal

import structlog
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError

from wild_oasis.db.readers.settings import get_settings_row
from wild_oasis.db.writers.settings import insert_settings, update_settings as write_settings
from wild_oasis.errors import ConflictError, InvalidInputError, NotFoundError

logger = structlog.get_logger(__name__)

DEFAULT_SETTINGS: dict[str, Any] = {
    "min_booking_length": 1,
    "max_booking_length": 30,
    "max_guests_per_booking": 10,
    "breakfast_price": 15.0,
}

SETTING_FIELDS = tuple(DEFAULT_SETTINGS)


@dataclass(frozen=True)
class SettingsResult:
    """Settings values plus where they came from."""

    source: Literal["persisted", "default"]
    values: dict[str, Any]

    @property
    def is_default(self) -> bool:
        return self.source == "default"


def _policy_values(row: dict[str, Any]) -> dict[str, Any]:
    return {field: row[field] for field in SETTING_FIELDS}


def validate_settings(values: dict[str, Any]) -> None:
    """
    Check a complete set of settings values.

    Raises:
        InvalidInputError: On the first rule that fails
    """
    missing = [field for field in SETTING_FIELDS if values.get(field) is None]
    if missing:
        raise InvalidInputError(f"Missing required fields: {', '.join(missing)}")
    if values["min_booking_length"] < 1:
        raise InvalidInputError("Minimum booking length must be at least 1 night")
    if values["max_booking_length"] < 1:
        raise InvalidInputError("Maximum booking length must be at least 1 night")
    if values["max_booking_length"] < values["min_booking_length"]:
        raise InvalidInputError(
            "Maximum booking length must be greater than or equal to minimum booking length"
        )
    if values["max_guests_per_booking"] < 1:
        raise InvalidInputError("Maximum guests per booking must be at least 1")
    if not math.isfinite(values["breakfast_price"]):
        raise InvalidInputError("Breakfast price must be a number")
    if values["breakfast_price"] < 0:
        raise InvalidInputError("Breakfast price cannot be negative")


def get_settings_or_default(conn: Connection) -> SettingsResult:
    row = get_settings_row(conn)
    if row is None:
        return SettingsResult(source="default", values=dict(DEFAULT_SETTINGS))
    return SettingsResult(source="persisted", values=_policy_values(row))


def create_settings(conn: Connection, data: dict[str, Any]) -> SettingsResult:
    """
    Persist settings for the first time.

    Raises:
        ConflictError: Settings already exist (including a concurrent create)
        InvalidInputError: Values fail validation
    """
    if get_settings_row(conn) is not None:
        raise ConflictError("Settings already exist. Use PATCH to update.")
    validate_settings(data)
    try:
        insert_settings(conn, {field: data[field] for field in SETTING_FIELDS})
    except IntegrityError:
        raise ConflictError("Settings already exist. Use PATCH to update.") from None

    logger.info("settings_created")
    return get_settings_or_default(conn)


def update_settings(conn: Connection, changes: dict[str, Any]) -> SettingsResult:
    """
    Update persisted settings; the merged result is validated as a whole.

    Raises:
        NotFoundError: No settings row yet
        InvalidInputError: Merged values fail validation
    """
    row = get_settings_row(conn)
    if row is None:
        raise NotFoundError("Settings not found. Use POST to create new settings.")

    merged = {**_policy_values(row), **changes}
    validate_settings(merged)
    if changes:
        write_settings(conn, changes)

    logger.info("settings_updated", fields=sorted(changes))
    return get_settings_or_default(conn)


def reset_settings(conn: Connection) -> SettingsResult:
    """Persist the default settings, creating the row if needed."""
    if get_settings_row(conn) is None:
        insert_settings(conn, dict(DEFAULT_SETTINGS))
    else:
        write_settings(conn, dict(DEFAULT_SETTINGS))

    logger.info("settings_reset")
    return get_settings_or_default(conn)
