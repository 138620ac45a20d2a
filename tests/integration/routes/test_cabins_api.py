"""
Integration tests for /api/cabins endpoints.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.engine import Engine

from wild_oasis.models.bookings import Booking
from wild_oasis.utils.identifiers import new_id

CABINS = "/api/cabins"

CABIN_BODY = {
    "name": "002",
    "description": "Luxury cabin for couples",
    "regularPrice": 350,
    "maxCapacity": 2,
    "image": "https://example.com/cabin-002.jpg",
}


@pytest.mark.integration
def test_create_cabin_defaults_discount(client: TestClient) -> None:
    response = client.post(CABINS, json=CABIN_BODY)

    assert response.status_code == 201
    cabin = response.json()["cabin"]
    assert cabin["discount"] == 0
    assert cabin["regularPrice"] == 350
    assert client.get(f"{CABINS}/{cabin['id']}").json()["cabin"]["name"] == "002"


@pytest.mark.integration
def test_create_cabin_schema_errors_are_422(client: TestClient) -> None:
    response = client.post(CABINS, json={**CABIN_BODY, "maxCapacity": 0})

    assert response.status_code == 422


@pytest.mark.integration
def test_list_cabins_sorted_by_name(
    client: TestClient, make_cabin: Callable[..., dict[str, Any]]
) -> None:
    make_cabin(name="008")
    make_cabin(name="001")

    names = [c["name"] for c in client.get(CABINS).json()["cabins"]]

    assert names == ["001", "008"]


@pytest.mark.integration
def test_update_cabin_validates_merged_record(
    client: TestClient, make_cabin: Callable[..., dict[str, Any]]
) -> None:
    cabin = make_cabin()

    response = client.patch(f"{CABINS}/{cabin['id']}", json={"regularPrice": 250})

    assert response.status_code == 200
    assert response.json()["cabin"]["regularPrice"] == 250
    assert response.json()["cabin"]["discount"] == 20


@pytest.mark.integration
def test_cabin_lookup_errors(client: TestClient) -> None:
    assert client.get(f"{CABINS}/not-an-id").status_code == 400
    assert client.get(f"{CABINS}/{new_id()}").status_code == 404
    assert client.patch(f"{CABINS}/{new_id()}", json={"name": "x"}).status_code == 404


@pytest.mark.integration
def test_delete_cabin_removes_its_bookings(
    client: TestClient,
    test_engine: Engine,
    make_cabin: Callable[..., dict[str, Any]],
    make_guest: Callable[..., dict[str, Any]],
    make_booking: Callable[..., dict[str, Any]],
) -> None:
    cabin, other_cabin, guest = make_cabin(), make_cabin(name="002"), make_guest()
    make_booking(cabin["id"], guest["id"])
    make_booking(cabin["id"], guest["id"], status="checked-in")
    kept = make_booking(other_cabin["id"], guest["id"])

    response = client.delete(f"{CABINS}/{cabin['id']}")

    assert response.status_code == 200
    assert client.get(f"{CABINS}/{cabin['id']}").status_code == 404
    with test_engine.connect() as conn:
        remaining = conn.execute(select(Booking.id)).scalars().all()
        orphaned = conn.execute(
            select(func.count()).select_from(Booking).where(Booking.cabin_id == cabin["id"])
        ).scalar_one()
    assert remaining == [kept["id"]]
    assert orphaned == 0
