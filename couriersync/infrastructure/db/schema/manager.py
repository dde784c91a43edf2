from __future__ import annotations

import sqlite3

from couriersync.infrastructure.observability import get_logger

from .migrations import SchemaMigrator

_logger = get_logger(__name__)


def ensure_schema(conn: sqlite3.Connection) -> None:
    """Bring the database at ``conn`` up to the current schema version."""

    applied = SchemaMigrator(conn).migrate()
    if applied:
        _logger.debug("Applied schema migrations: %s", applied)
