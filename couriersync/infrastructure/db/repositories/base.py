"""Shared plumbing for the SQLite repositories.

Repositories receive an open :class:`sqlite3.Connection` and never close it;
the caller (usually a service) owns the connection lifetime.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from ..schema import ensure_schema


class BaseRepository:
    """Base class for repositories working on the sync database.

    Constructing a repository makes sure the schema is in place, so tests and
    scripts can hand in a bare connection to a fresh file.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        ensure_schema(self.conn)

    def _fetch_all_as_dicts(
        self, query: str, params: tuple[Any, ...] = ()
    ) -> list[dict[str, Any]]:
        cur = self.conn.execute(query, params)
        columns = [c[0] for c in cur.description]
        return [dict(zip(columns, row)) for row in cur.fetchall()]

    def _fetch_one_as_dict(
        self, query: str, params: tuple[Any, ...] = ()
    ) -> dict[str, Any] | None:
        cur = self.conn.execute(query, params)
        row = cur.fetchone()
        if row is None:
            return None
        return dict(zip([c[0] for c in cur.description], row))

    def _fetch_scalar(self, query: str, params: tuple[Any, ...] = ()) -> Any:
        """Return the first column of the first row, or ``None``."""
        row = self.conn.execute(query, params).fetchone()
        return row[0] if row else None

    def _execute_insert(self, query: str, params: tuple[Any, ...] = ()) -> int:
        """Run an INSERT, commit it and return the new row id."""
        cur = self.conn.execute(query, params)
        self.conn.commit()
        return cur.lastrowid or 0

    def _execute(self, query: str, params: tuple[Any, ...] = ()) -> int:
        """Run a single write statement, commit it and return the affected row count."""
        cur = self.conn.execute(query, params)
        self.conn.commit()
        return cur.rowcount

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Commit everything done inside the block, or roll all of it back."""
        with self.conn:
            yield self.conn
