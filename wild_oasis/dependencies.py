"""
FastAPI dependency injection providers.

Dependencies can be overridden in tests using app.dependency_overrides, which
is how the test suite points every route at an in-memory SQLite engine.
"""

from __future__ import annotations

from typing import Generator

from sqlalchemy.engine import Engine

from wild_oasis.db.engine import engine


def get_db_engine() -> Generator[Engine, None, None]:
    """
    Provide database engine for dependency injection.

    Yields:
        Engine: SQLAlchemy database engine

    Example:
        >>> @router.post("/bookings")
        >>> def create_booking(
        ...     payload: BookingCreatePayload,
        ...     engine: Engine = Depends(get_db_engine),
        ... ):
        ...     with engine.begin() as conn:
        ...         ...
    """
    yield engine
