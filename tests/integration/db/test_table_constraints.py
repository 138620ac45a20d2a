"""
Integration tests for table-level constraints.

These guard the invariants even for writes that bypass the service layer.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from wild_oasis.db.writers.settings import insert_settings
from wild_oasis.services.settings import DEFAULT_SETTINGS


@pytest.mark.integration
@pytest.mark.parametrize(
    "overrides",
    [
        {"status": "cancelled"},
        {"num_nights": 0},
        {"num_guests": 0},
        {"total_price": -1.0},
    ],
)
def test_booking_check_constraints(
    make_cabin: Callable[..., dict[str, Any]],
    make_guest: Callable[..., dict[str, Any]],
    make_booking: Callable[..., dict[str, Any]],
    overrides: dict[str, Any],
) -> None:
    cabin, guest = make_cabin(), make_guest()

    with pytest.raises(IntegrityError):
        make_booking(cabin["id"], guest["id"], **overrides)


@pytest.mark.integration
def test_cabin_capacity_must_be_positive(make_cabin: Callable[..., dict[str, Any]]) -> None:
    with pytest.raises(IntegrityError):
        make_cabin(max_capacity=0)


@pytest.mark.integration
def test_guest_email_is_unique(make_guest: Callable[..., dict[str, Any]]) -> None:
    make_guest(email="ana@example.com")

    with pytest.raises(IntegrityError):
        make_guest(email="ana@example.com")


@pytest.mark.integration
def test_settings_table_holds_one_row(test_engine: Engine) -> None:
    with test_engine.begin() as conn:
        insert_settings(conn, dict(DEFAULT_SETTINGS))

    with pytest.raises(IntegrityError):
        with test_engine.begin() as conn:
            insert_settings(conn, dict(DEFAULT_SETTINGS))
