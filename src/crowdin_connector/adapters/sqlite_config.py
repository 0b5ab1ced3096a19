from __future__ import annotations

import sqlite3

from crowdin_connector.ports.config_port import ConfigPort


class SQLiteConfigStorage(ConfigPort):
    def __init__(self, sqlite_path: str) -> None:
        self._sqlite_path = sqlite_path
        self._ensure_schema()

    def get(self, key: str) -> str | None:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    """
                    SELECT value
                    FROM settings
                    WHERE key = ?
                    """,
                    (key,),
                ).fetchone()
            return row[0] if row else None
        except sqlite3.Error as exc:
            raise RuntimeError(f"Failed to read setting {key}") from exc

    def set(self, key: str, value: str | None) -> None:
        try:
            with self._connect() as conn:
                if value is None:
                    conn.execute("DELETE FROM settings WHERE key = ?", (key,))
                    return
                conn.execute(
                    """
                    INSERT INTO settings(key, value)
                    VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value
                    """,
                    (key, value),
                )
        except sqlite3.Error as exc:
            raise RuntimeError(f"Failed to save setting {key}") from exc

    def _ensure_schema(self) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS settings(
                        key TEXT PRIMARY KEY,
                        value TEXT
                    )
                    """
                )
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to initialize settings schema") from exc

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._sqlite_path)
