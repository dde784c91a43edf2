from __future__ import annotations

import sqlite3

from ..connection import iso_utcnow
from .tables import (
    SCHEMA_COURIER_LOCATIONS_SQL,
    SCHEMA_SYNC_RUNS_SQL,
    SCHEMA_TOKEN_CACHE_SQL,
    SCHEMA_VERSION_SQL,
)

# Scripts that bring a database from ``version - 1`` to ``version``.
MIGRATIONS: dict[int, tuple[str, ...]] = {
    1: (SCHEMA_COURIER_LOCATIONS_SQL, SCHEMA_TOKEN_CACHE_SQL, SCHEMA_SYNC_RUNS_SQL),
}

CURRENT_SCHEMA_VERSION = max(MIGRATIONS)


class SchemaMigrator:
    """Applies numbered schema scripts and records the version reached.

    ``schema_version`` holds a single row. A database without that row is
    treated as version 0 and receives every script in order.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def get_version(self) -> int:
        self.conn.execute(SCHEMA_VERSION_SQL)
        row = self.conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
        return int(row[0]) if row and row[0] is not None else 0

    def pending(self) -> list[int]:
        current = self.get_version()
        return [version for version in sorted(MIGRATIONS) if version > current]

    def migrate(self) -> list[int]:
        """Run every pending script and return the versions applied."""
        applied = self.pending()
        for version in applied:
            for script in MIGRATIONS[version]:
                self.conn.executescript(script)
            self.conn.execute("DELETE FROM schema_version")
            self.conn.execute(
                "INSERT INTO schema_version (version, applied_at) VALUES (?, ?)",
                (version, iso_utcnow()),
            )
            self.conn.commit()
        return applied
