"""Token cache management CLI for couriersync."""

from __future__ import annotations

import click
from rich.console import Console

from couriersync.app.config import ConfigError
from couriersync.interfaces.cli.context import build_cli_context, sync_service
from couriersync.services.providers import UnsupportedProviderError, supported_providers

console = Console()


@click.group()
@click.option("--db", "db_path", default=None, help="Path to the SQLite database.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=str),
    default=None,
    help="Path to the JSON configuration file.",
)
@click.pass_context
def tokens(ctx: click.Context, db_path: str | None, config_path: str | None) -> None:
    """Manage cached provider access and refresh tokens."""

    ctx.ensure_object(dict)
    try:
        ctx.obj["cli_context"] = build_cli_context(db_path, config_path)
    except ConfigError as exc:
        console.print(f"[red]Configuration error: {exc}[/red]")
        ctx.exit(1)


@tokens.command("clear")
@click.option(
    "--provider",
    "provider_name",
    default="pathao",
    show_default=True,
    help="Courier provider whose tokens are cleared.",
)
@click.pass_context
def clear_cmd(ctx: click.Context, provider_name: str) -> None:
    """Forget cached tokens so the next sync re-authenticates."""

    service = sync_service(ctx.obj["cli_context"])
    try:
        service.clear_tokens(provider_name)
    except UnsupportedProviderError as exc:
        console.print(f"[red]{exc}[/red]")
        console.print(f"Supported providers: {', '.join(supported_providers())}")
        ctx.exit(1)
    console.print(f"[green]Cleared cached tokens for [bold]{provider_name.lower()}[/bold]")
