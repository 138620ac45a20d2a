"""
Unit tests for structlog configuration.
"""

from __future__ import annotations

import json
from typing import Generator

import pytest
import structlog

from wild_oasis.config import LOG_LEVEL
from wild_oasis.logging_config import setup_logging


@pytest.fixture
def json_logging() -> Generator[None, None, None]:
    setup_logging("INFO")
    yield
    structlog.contextvars.clear_contextvars()
    setup_logging(LOG_LEVEL)


@pytest.mark.unit
def test_events_render_as_json_with_bound_context(
    json_logging: None, capsys: pytest.CaptureFixture[str]
) -> None:
    structlog.contextvars.bind_contextvars(request_id="req-1")

    structlog.get_logger("test").info("booking_created", booking_id="b-1")

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["event"] == "booking_created"
    assert record["booking_id"] == "b-1"
    assert record["request_id"] == "req-1"
    assert record["level"] == "info"


@pytest.mark.unit
def test_exceptions_are_serialized(
    json_logging: None, capsys: pytest.CaptureFixture[str]
) -> None:
    try:
        raise RuntimeError("db exploded")
    except RuntimeError:
        structlog.get_logger("test").exception("booking_creation_failed")

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["event"] == "booking_creation_failed"
    assert "RuntimeError: db exploded" in record["exception"]
