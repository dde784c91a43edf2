"""Shared helpers for composing CLI command contexts.

This module centralises common CLI wiring such as resolving the configuration
file, the database path and building services bound to SQLite connections.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, ContextManager

from couriersync.app.config import load_config
from couriersync.infrastructure.db import get_connection, get_path_config
from couriersync.services.locations import LocationViewService
from couriersync.services.sync_service import SyncService


@dataclass(frozen=True)
class CLIContext:
    """Container for CLI dependencies and configuration."""

    db_path: Path
    config: dict[str, Any] = field(default_factory=dict)
    config_path: Path | None = None

    @property
    def connection_factory(self) -> Callable[[], ContextManager[sqlite3.Connection]]:
        db_path = self.db_path
        config_path = self.config_path

        def factory() -> ContextManager[sqlite3.Connection]:
            return get_connection(db_path, config_path=config_path)

        return factory


def build_cli_context(
    db_path: str | Path | None = None, config_path: str | Path | None = None
) -> CLIContext:
    """Build the CLI context with the resolved configuration and database path.

    Raises:
        ConfigError: If an explicit ``config_path`` does not exist.
    """

    config = load_config(config_path)
    paths = get_path_config(config_path)
    resolved_db_path = (
        Path(db_path).expanduser() if db_path is not None else paths["db_path"]
    )
    return CLIContext(
        db_path=resolved_db_path,
        config=config,
        config_path=Path(config_path) if config_path is not None else None,
    )


def sync_service(cli_context: CLIContext) -> SyncService:
    """Return a SyncService wired to the CLI context database and config."""

    return SyncService(cli_context.connection_factory, config=cli_context.config)


def location_view_service(cli_context: CLIContext) -> LocationViewService:
    """Return a LocationViewService wired to the CLI context database."""

    return LocationViewService(cli_context.connection_factory)
