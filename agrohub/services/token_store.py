"""SQLite persistence for auth tokens."""

from __future__ import annotations

import sqlite3
import threading
import time
from pathlib import Path

KEY_ACCESS_TOKEN = "access_token"
KEY_REFRESH_TOKEN = "refresh_token"
KEY_EXPIRATION_TIME = "expiration_time"
KEY_USERNAME = "username"


class TokenStore:
    """Stores the session's tokens as key/value rows in SQLite.

    Expiry is kept as wall-clock epoch seconds so it survives restarts.
    """

    def __init__(self, db_path: Path | str = ":memory:") -> None:
        self._conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self._create_tables()

    def _create_tables(self) -> None:
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS auth_tokens (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        self._conn.commit()

    def _set(self, values: dict[str, str]) -> None:
        with self._lock:
            self._conn.executemany("""
                INSERT INTO auth_tokens (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """, list(values.items()))
            self._conn.commit()

    def _get(self, key: str) -> str | None:
        with self._lock:
            row = self._conn.execute(
                "SELECT value FROM auth_tokens WHERE key = ?", (key,)
            ).fetchone()
        return row["value"] if row else None

    def save_tokens(self, access_token: str, refresh_token: str, expires_in: float) -> None:
        """Store both tokens; the access token expires ``expires_in`` seconds from now."""
        self._set({
            KEY_ACCESS_TOKEN: access_token,
            KEY_REFRESH_TOKEN: refresh_token,
            KEY_EXPIRATION_TIME: str(time.time() + expires_in),
        })

    def get_access_token(self) -> str | None:
        return self._get(KEY_ACCESS_TOKEN)

    def get_refresh_token(self) -> str | None:
        return self._get(KEY_REFRESH_TOKEN)

    def is_access_token_valid(self) -> bool:
        token = self._get(KEY_ACCESS_TOKEN)
        expires_at = self._get(KEY_EXPIRATION_TIME)
        if token is None or expires_at is None:
            return False
        return float(expires_at) > time.time()

    def save_username(self, username: str) -> None:
        self._set({KEY_USERNAME: username})

    def get_username(self) -> str | None:
        return self._get(KEY_USERNAME)

    def clear_tokens(self) -> None:
        with self._lock:
            self._conn.execute("DELETE FROM auth_tokens")
            self._conn.commit()

    def close(self) -> None:
        self._conn.close()
