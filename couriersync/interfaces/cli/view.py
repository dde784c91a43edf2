"""Text viewer for courier locations stored in the database."""

from __future__ import annotations

import json
from dataclasses import asdict

import click
from rich.console import Console
from rich.table import Table

from couriersync.app.config import ConfigError
from couriersync.domain.models import CourierProvider
from couriersync.interfaces.cli.context import build_cli_context, location_view_service

console = Console()


@click.command()
@click.option("--db", "db_path", default=None, help="Path to the SQLite database.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=str),
    default=None,
    help="Path to the JSON configuration file.",
)
@click.option(
    "--provider",
    "provider_name",
    default=None,
    help="Filter locations by provider (e.g. pathao).",
)
@click.option("--city", "city_name", default=None, help="Filter by (partial) city name.")
@click.option(
    "--limit",
    type=int,
    default=50,
    show_default=True,
    help="Maximum number of locations to display (0 for no limit).",
)
@click.option("--json-output", is_flag=True, help="Output the results as JSON.")
@click.pass_context
def view(
    ctx: click.Context,
    db_path: str | None,
    config_path: str | None,
    provider_name: str | None,
    city_name: str | None,
    limit: int,
    json_output: bool,
) -> None:
    """Show courier locations stored in the database."""

    provider_value = None
    if provider_name:
        try:
            provider_value = CourierProvider.from_name(provider_name).value
        except ValueError:
            console.print(f"[red]Unknown provider '{provider_name}'.[/red]")
            ctx.exit(1)

    try:
        cli_context = build_cli_context(db_path, config_path)
    except ConfigError as exc:
        console.print(f"[red]Configuration error: {exc}[/red]")
        ctx.exit(1)

    service = location_view_service(cli_context)
    locations = service.list_locations(
        provider_name=provider_value, city_name=city_name, limit=limit
    )

    if json_output:
        payload = [asdict(location) for location in locations]
        click.echo(json.dumps(payload, indent=2, default=str))
        return

    if not locations:
        console.print("[yellow]No locations found with the provided filters.[/yellow]")
        return

    table = Table(title=f"Courier locations ({len(locations)})")
    table.add_column("Provider", style="bold")
    table.add_column("City")
    table.add_column("Zone")
    table.add_column("Area")
    table.add_column("Home delivery")
    table.add_column("Pickup")
    for location in locations:
        table.add_row(
            location.provider_name,
            f"{location.city_name} ({location.city_id})",
            f"{location.zone_name} ({location.zone_id})",
            f"{location.area_name or '-'} ({location.area_id})",
            "yes" if location.home_delivery_available else "no",
            "yes" if location.pickup_available else "no",
        )
    console.print(table)
