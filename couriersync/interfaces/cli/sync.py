"""Synchronization CLI for couriersync."""

from __future__ import annotations

import logging
import sqlite3

import click
from rich.console import Console

from couriersync.app.config import ConfigError
from couriersync.infrastructure.db import DatabaseError
from couriersync.infrastructure.observability import configure_logging
from couriersync.interfaces.cli.context import build_cli_context, sync_service
from couriersync.services.providers import (
    UnsupportedProviderError,
    get_provider,
    supported_providers,
)

console = Console()


@click.command(name="sync")
@click.option(
    "--provider",
    "provider_name",
    default="pathao",
    show_default=True,
    help="Courier provider name.",
)
@click.option(
    "--db",
    "db_path",
    default=None,
    help="Path to the SQLite database file. Will be created if it does not exist.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=str),
    default=None,
    help="Path to the JSON configuration file (defaults to config.json in the project root).",
)
@click.option(
    "--batch-size",
    type=click.IntRange(min=1),
    default=None,
    help="Records per upsert batch (defaults to sync.batch_size, 50).",
)
@click.option(
    "--chunk-size",
    type=click.IntRange(min=1),
    default=None,
    help="Zones processed per chunk (defaults to sync.chunk_size, 10).",
)
@click.option(
    "--verbose/--no-verbose",
    default=False,
    show_default=True,
    help="Enable debug logging during the sync run.",
)
@click.option(
    "--log-path",
    type=click.Path(path_type=str),
    help="Optional file that also receives the sync log.",
)
@click.pass_context
def sync(
    ctx: click.Context,
    provider_name: str,
    db_path: str | None,
    config_path: str | None,
    batch_size: int | None,
    chunk_size: int | None,
    verbose: bool,
    log_path: str | None,
) -> None:
    """Sync courier provider data from the external API.

    Walks the provider's cities, zones and areas and upserts every location
    into the local SQLite database. Exits with status 1 when the provider is
    unsupported, its configuration is incomplete or the run fails.
    """
    configure_logging(level=logging.DEBUG if verbose else logging.INFO, log_path=log_path)
    provider_key = (provider_name or "pathao").strip().lower()
    console.print(f"Starting courier data sync for provider: {provider_key}...")

    try:
        get_provider(provider_key)
    except UnsupportedProviderError:
        console.print(f"[red]Provider '{provider_key}' is not supported.[/red]")
        console.print(f"Supported providers: {', '.join(supported_providers())}")
        ctx.exit(1)

    try:
        cli_context = build_cli_context(db_path, config_path)
        service = sync_service(cli_context)
        with console.status("Running sync..."):
            result = service.run_sync(
                provider_key, batch_size=batch_size, chunk_size=chunk_size
            )
    except ConfigError as exc:
        console.print(f"[red]Configuration error: {exc}[/red]")
        ctx.exit(1)
    except (DatabaseError, sqlite3.Error, OSError) as exc:
        console.print(f"[red]Database error: {exc}[/red]")
        ctx.exit(1)

    if not result.success:
        console.print(f"[red]{result.message}[/red]")
        ctx.exit(1)

    console.print(f"[green]{result.message}[/green]")
    console.print(f"Processed {result.processed_count} records")
