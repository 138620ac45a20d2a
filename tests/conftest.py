"""
Shared fixtures: an in-memory SQLite engine per test, a TestClient wired to it,
and small factories for cabins, guests and bookings.
"""

from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timezone
from typing import Any, Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from wild_oasis.db.engine import engine_options
from wild_oasis.db.writers.bookings import insert_booking
from wild_oasis.db.writers.cabins import insert_cabin
from wild_oasis.db.writers.guests import insert_guest
from wild_oasis.dependencies import get_db_engine
from wild_oasis.main import app
from wild_oasis.models.base import Base
from wild_oasis.models.bookings import Booking  # noqa: F401
from wild_oasis.models.cabins import Cabin  # noqa: F401
from wild_oasis.models.guests import Guest  # noqa: F401
from wild_oasis.models.settings import Setting  # noqa: F401
from wild_oasis.utils.identifiers import new_id


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def test_engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database with all tables created."""
    engine = create_engine("sqlite://", future=True, **engine_options("sqlite://"))
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def client(test_engine: Engine) -> Generator[TestClient, None, None]:
    """FastAPI test client whose routes use the test engine."""
    app.dependency_overrides[get_db_engine] = lambda: test_engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_cabin(test_engine: Engine) -> Callable[..., dict[str, Any]]:
    """Insert a cabin (200/night, 20 discount, 4 guests) and return its row."""

    def _make(**overrides: Any) -> dict[str, Any]:
        cabin = {
            "id": new_id(),
            "name": "001",
            "description": "Cozy cabin in the woods",
            "regular_price": 200.0,
            "max_capacity": 4,
            "discount": 20.0,
            "image": "https://example.com/cabin-001.jpg",
            **overrides,
        }
        with test_engine.begin() as conn:
            insert_cabin(conn, cabin)
        return cabin

    return _make


@pytest.fixture
def make_guest(test_engine: Engine) -> Callable[..., dict[str, Any]]:
    """Insert a guest and return its row. Emails are unique per call."""
    counter = iter(range(1, 10_000))

    def _make(**overrides: Any) -> dict[str, Any]:
        n = next(counter)
        guest = {
            "id": new_id(),
            "full_name": f"Guest {n}",
            "email": f"guest{n}@example.com",
            "nationality": "Portugal",
            "national_id": f"PT{n:06d}",
            "phone_number": "",
            "address": "",
            **overrides,
        }
        with test_engine.begin() as conn:
            insert_guest(conn, guest)
        return guest

    return _make


@pytest.fixture
def make_booking(test_engine: Engine) -> Callable[..., dict[str, Any]]:
    """
    Insert a booking row directly, bypassing validation, so tests can control
    status and created_at.
    """

    def _make(cabin_id: str, guest_id: str, **overrides: Any) -> dict[str, Any]:
        booking = {
            "id": new_id(),
            "cabin_id": cabin_id,
            "guest_id": guest_id,
            "start_date": utc(2025, 1, 10),
            "end_date": utc(2025, 1, 15),
            "num_nights": 5,
            "num_guests": 2,
            "cabin_price": 900.0,
            "extras_price": 0.0,
            "total_price": 900.0,
            "status": "unconfirmed",
            "has_breakfast": False,
            "is_paid": False,
            **overrides,
        }
        with test_engine.begin() as conn:
            insert_booking(conn, booking)
        return booking

    return _make
