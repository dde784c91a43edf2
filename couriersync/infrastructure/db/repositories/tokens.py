from __future__ import annotations

import sqlite3
import time
from typing import Callable

from ..connection import iso_utcnow
from .base import BaseRepository


class TokenRepository(BaseRepository):
    """String cache with a per-key expiry, backed by the ``token_cache`` table.

    Rows whose ``expires_at`` has passed read as missing. The table lives in
    the sync database, so cached credentials outlive a single CLI process.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(conn)
        self._clock = clock

    def get(self, key: str) -> str | None:
        return self._fetch_scalar(
            "SELECT value FROM token_cache WHERE key = ? AND expires_at > ?",
            (key, self._clock()),
        )

    def put(self, key: str, value: str, ttl_seconds: float) -> None:
        self._execute(
            "INSERT INTO token_cache (key, value, expires_at, updated_at) VALUES (?, ?, ?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
            "expires_at = excluded.expires_at, updated_at = excluded.updated_at",
            (key, value, self._clock() + float(ttl_seconds), iso_utcnow()),
        )

    def forget(self, key: str) -> None:
        self._execute("DELETE FROM token_cache WHERE key = ?", (key,))
