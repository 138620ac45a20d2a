from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from wild_oasis.models.settings import SETTINGS_ROW_ID, Setting


def get_settings_row(conn: Connection) -> Optional[dict[str, Any]]:
    """
    Fetch the singleton settings row.

    Returns:
        Optional[dict[str, Any]]: The persisted settings, or None if never written.
    """
    row = (
        conn.execute(select(Setting).where(Setting.id == SETTINGS_ROW_ID)).mappings().fetchone()
    )
    return dict(row) if row else None
