"""Interface layer for couriersync.

Packages under ``couriersync.interfaces`` expose boundary adapters such as CLI
commands.
"""

from . import cli

__all__ = ["cli"]
