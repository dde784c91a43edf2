from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path

from .config import get_database_settings


class DatabaseError(Exception):
    """Raised when a SQLite connection cannot be opened or configured."""


def iso_utcnow() -> str:
    """Return an ISO‑8601 timestamp in UTC with ``Z`` suffix."""

    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def apply_pragmas(
    conn: sqlite3.Connection,
    *,
    enable_wal: bool = True,
    busy_timeout_ms: int | None = None,
) -> None:
    try:
        if enable_wal:
            conn.execute("PRAGMA journal_mode=WAL;")
        if busy_timeout_ms is not None:
            conn.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)};")
    except sqlite3.Error as exc:
        raise DatabaseError(f"Failed to apply PRAGMAs: {exc}") from exc


@contextmanager
def get_connection(
    db_path: str | Path | None = None,
    *,
    timeout: float | None = None,
    enable_wal: bool | None = None,
    config_path: str | Path | None = None,
) -> Iterator[sqlite3.Connection]:
    """Open the sync database, apply PRAGMAs, and close it when the block exits.

    Arguments left as ``None`` fall back to the configuration file.
    """

    settings = get_database_settings(config_path)
    resolved_db_path = Path(db_path) if db_path is not None else settings.db_path
    resolved_db_path.parent.mkdir(parents=True, exist_ok=True)
    timeout_value = timeout if timeout is not None else settings.timeout_seconds
    try:
        conn = sqlite3.connect(resolved_db_path, timeout=timeout_value)
    except sqlite3.Error as exc:
        raise DatabaseError(
            f"Failed to connect to database {resolved_db_path}: {exc}"
        ) from exc
    try:
        apply_pragmas(
            conn,
            enable_wal=settings.enable_wal if enable_wal is None else enable_wal,
            busy_timeout_ms=int(timeout_value * 1000),
        )
        yield conn
    finally:
        conn.close()
