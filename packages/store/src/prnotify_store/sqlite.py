"""SQLiteStore: local file-based settings store.

Suited to a single host process (a webhook receiver or a CI job sharing a
cache directory). Queries are keyed lookups on the primary key, so each call
is fast enough to run directly on the event loop.

Schema:
  user_settings  one row per user that has ever changed a preference.
                 enabled is NULL when the user has a record but no explicit
                 choice, which reads back as enabled.
"""

from __future__ import annotations

import logging
import sqlite3

from prnotify_store.base import BaseStore
from prnotify_store.models import UserSettings, default_settings

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS user_settings (
    user_id     TEXT PRIMARY KEY,
    enabled     INTEGER
);
"""


class SQLiteStore(BaseStore):
    """Stores notification settings in a local SQLite database file.

    The database file path defaults to `.prnotify.db` in the current working
    directory. Configure via .prnotify.yml: `store_path: /path/to/prnotify.db`.
    """

    def __init__(self, db_path: str = ".prnotify.db"):
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    async def get_user_settings(self, user_id: str) -> UserSettings:
        row = self._conn.execute(
            "SELECT user_id, enabled FROM user_settings WHERE user_id=?",
            (user_id,),
        ).fetchone()
        if row is None:
            return default_settings(user_id)
        return self._row_to_settings(row)

    async def set_user_settings(self, user_id: str, settings: UserSettings) -> None:
        enabled = None if settings.enabled is None else int(settings.enabled)
        self._conn.execute(
            """
            INSERT INTO user_settings (user_id, enabled)
            VALUES (?, ?)
            ON CONFLICT(user_id) DO UPDATE SET enabled=excluded.enabled
            """,
            (user_id, enabled),
        )
        self._conn.commit()
        logger.debug("Stored settings for %s (enabled=%s)", user_id, settings.enabled)

    def close(self) -> None:
        self._conn.close()

    @staticmethod
    def _row_to_settings(row: sqlite3.Row) -> UserSettings:
        enabled = row["enabled"]
        return UserSettings(
            user_id=row["user_id"],
            enabled=None if enabled is None else bool(enabled),
        )
