from typing import Any

from sqlalchemy import insert, update
from sqlalchemy.engine import Connection

from wild_oasis.metrics import db_operations
from wild_oasis.models.settings import SETTINGS_ROW_ID, Setting
from wild_oasis.utils.datetime import utc_now


def insert_settings(conn: Connection, data: dict[str, Any]) -> None:
    """
    Insert the singleton settings row.

    Raises:
        sqlalchemy.exc.IntegrityError: If the row already exists.
    """
    now = utc_now()
    conn.execute(
        insert(Setting).values(id=SETTINGS_ROW_ID, created_at=now, updated_at=now, **data)
    )
    db_operations.labels(operation="insert", table="settings").inc()


def update_settings(conn: Connection, data: dict[str, Any]) -> bool:
    result = conn.execute(
        update(Setting)
        .where(Setting.id == SETTINGS_ROW_ID)
        .values(**data, updated_at=utc_now())
    )
    db_operations.labels(operation="update", table="settings").inc()
    return result.rowcount > 0
