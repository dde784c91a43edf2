"""Entry point for running the couriersync CLI.

This module defines a top-level Click group that aggregates all subcommands
defined in the ``couriersync.interfaces.cli`` package. Executing
``python -m couriersync.interfaces.cli`` (or the ``couriersync`` console
script) will invoke this group and present the available commands.
"""

import click

from .sync import sync
from .tokens import tokens
from .view import view


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def cli() -> None:
    """couriersync command-line interface."""


cli.add_command(sync)
cli.add_command(view)
cli.add_command(tokens)


if __name__ == "__main__":
    cli()
