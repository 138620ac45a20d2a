"""
SQLAlchemy engine singleton with connection pooling.

Server databases get a sized connection pool. SQLite (used for local runs and
tests) gets a single shared connection so an in-memory database survives
across requests and threads.
"""

from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from wild_oasis.config import DATABASE_URL

if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is not set.")


def engine_options(url: str) -> dict[str, Any]:
    """
    Build create_engine keyword arguments appropriate for the database URL.

    Args:
        url: SQLAlchemy database URL

    Returns:
        dict: Keyword arguments for create_engine
    """
    if url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_size": 10,  # Number of connections to maintain in the pool
        "max_overflow": 20,  # Additional connections when pool is exhausted
        "pool_pre_ping": True,  # Verify connections before using
        "pool_recycle": 3600,  # Recycle connections after 1 hour
    }


engine: Engine = create_engine(DATABASE_URL, future=True, echo=False, **engine_options(DATABASE_URL))


def check_engine_health(db_engine: Engine = engine) -> bool:
    """
    Check if the database engine is healthy and connections are working.

    Used by the /ready endpoint to verify database connectivity before
    allowing traffic to the service.

    Returns:
        bool: True if database is reachable and healthy, False otherwise
    """
    try:
        with db_engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
