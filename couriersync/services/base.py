"""Connection handling shared by the service layer."""

from __future__ import annotations

import sqlite3
from contextlib import AbstractContextManager
from functools import partial
from typing import Any, Callable, TypeVar

from couriersync.infrastructure.db import ensure_schema, get_connection
from couriersync.infrastructure.observability import get_logger

ConnectionFactory = Callable[[], AbstractContextManager[sqlite3.Connection]]
T = TypeVar("T")
ServiceT = TypeVar("ServiceT", bound="BaseService")


class BaseService:
    """Base for services that work against the sync database.

    A service holds a factory instead of a connection: every public call opens
    a fresh connection, brings the schema up to date, and closes it again. Tests
    inject a factory pointing at a ``tmp_path`` database.
    """

    def __init__(self, connection_factory: ConnectionFactory) -> None:
        self._connection_factory = connection_factory
        self._logger = get_logger(self.__class__.__module__)

    @classmethod
    def from_sqlite_path(cls: type[ServiceT], db_path: str, **kwargs: Any) -> ServiceT:
        """Bind the service to the SQLite file at ``db_path``.

        Extra keyword arguments are passed to the constructor, e.g.
        ``SyncService.from_sqlite_path(path, config=config)``.
        """
        return cls(partial(get_connection, db_path), **kwargs)

    def _with_connection(self, fn: Callable[[sqlite3.Connection], T]) -> T:
        with self._connection_factory() as conn:
            ensure_schema(conn)
            return fn(conn)
