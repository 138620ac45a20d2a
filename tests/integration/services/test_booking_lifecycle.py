"""
Integration tests for booking creation and transitions at the service layer.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest
from sqlalchemy.engine import Engine

from wild_oasis.errors import ConflictError, InvalidStatusError, NotFoundError
from wild_oasis.services.bookings import (
    TransitionPolicy,
    create_booking,
    update_payment_status,
    update_status,
)
from wild_oasis.services.pricing import PricingMode


def payload(cabin_id: str, guest_id: str, start: str, end: str) -> dict[str, Any]:
    return {
        "cabin_id": cabin_id,
        "guest_id": guest_id,
        "start_date": start,
        "end_date": end,
        "num_guests": 2,
    }


@pytest.fixture
def pair(
    make_cabin: Callable[..., dict[str, Any]], make_guest: Callable[..., dict[str, Any]]
) -> tuple[str, str]:
    return make_cabin()["id"], make_guest()["id"]


@pytest.mark.integration
def test_strict_overlap_rejects_intersecting_ranges(
    test_engine: Engine, pair: tuple[str, str]
) -> None:
    cabin_id, guest_id = pair
    with test_engine.begin() as conn:
        create_booking(
            conn,
            payload(cabin_id, guest_id, "2025-01-10", "2025-01-15"),
            mode=PricingMode.DERIVE,
            strict_overlap=True,
        )

    with test_engine.begin() as conn:
        with pytest.raises(ConflictError, match="already booked"):
            create_booking(
                conn,
                payload(cabin_id, guest_id, "2025-01-14", "2025-01-18"),
                mode=PricingMode.DERIVE,
                strict_overlap=True,
            )


@pytest.mark.integration
def test_strict_overlap_accepts_back_to_back_stays(
    test_engine: Engine, pair: tuple[str, str]
) -> None:
    cabin_id, guest_id = pair
    with test_engine.begin() as conn:
        create_booking(
            conn,
            payload(cabin_id, guest_id, "2025-01-10", "2025-01-15"),
            mode=PricingMode.DERIVE,
            strict_overlap=True,
        )
        second = create_booking(
            conn,
            payload(cabin_id, guest_id, "2025-01-15", "2025-01-17"),
            mode=PricingMode.DERIVE,
            strict_overlap=True,
        )

    assert second["num_nights"] == 2


@pytest.mark.integration
def test_overlaps_are_allowed_when_strict_mode_is_off(
    test_engine: Engine, pair: tuple[str, str]
) -> None:
    cabin_id, guest_id = pair
    with test_engine.begin() as conn:
        for _ in range(2):
            create_booking(
                conn,
                payload(cabin_id, guest_id, "2025-01-10", "2025-01-15"),
                mode=PricingMode.DERIVE,
            )


@pytest.mark.integration
def test_strict_policy_walks_forward_one_step_at_a_time(
    test_engine: Engine, pair: tuple[str, str], make_booking: Callable[..., dict[str, Any]]
) -> None:
    booking = make_booking(*pair)

    with test_engine.begin() as conn:
        for status in ("confirmed", "checked-in", "checked-out"):
            updated = update_status(conn, booking["id"], status, policy=TransitionPolicy.STRICT)
            assert updated["status"] == status

        with pytest.raises(InvalidStatusError):
            update_status(conn, booking["id"], "unconfirmed", policy=TransitionPolicy.STRICT)


@pytest.mark.integration
def test_setting_same_status_is_idempotent(
    test_engine: Engine, pair: tuple[str, str], make_booking: Callable[..., dict[str, Any]]
) -> None:
    booking = make_booking(*pair, status="confirmed")

    with test_engine.begin() as conn:
        first = update_status(conn, booking["id"], "confirmed", policy=TransitionPolicy.STRICT)
        second = update_status(conn, booking["id"], "confirmed", policy=TransitionPolicy.STRICT)

    assert first["status"] == second["status"] == "confirmed"


@pytest.mark.integration
def test_payment_status_can_move_status_under_policy(
    test_engine: Engine, pair: tuple[str, str], make_booking: Callable[..., dict[str, Any]]
) -> None:
    booking = make_booking(*pair, status="unconfirmed")

    with test_engine.begin() as conn:
        updated = update_payment_status(conn, booking["id"], is_paid=True, status="confirmed")

        with pytest.raises(InvalidStatusError):
            update_payment_status(
                conn, booking["id"], status="checked-out", policy=TransitionPolicy.STRICT
            )

    assert updated["is_paid"] is True
    assert updated["status"] == "confirmed"
    assert updated["payment_intent_id"] is None


@pytest.mark.integration
def test_payment_status_on_missing_booking(test_engine: Engine) -> None:
    with test_engine.begin() as conn:
        with pytest.raises(NotFoundError, match="Booking not found"):
            update_payment_status(conn, "0b6c3f0e-3c33-4f55-9d2b-2f3e4b9c1a00", is_paid=True)
