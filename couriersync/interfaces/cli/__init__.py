"""CLI interface for couriersync.

This package is the home for all Click commands. Use the
``couriersync.interfaces.cli`` namespace for imports and module execution.
"""

from .__main__ import cli
from .sync import sync
from .tokens import tokens
from .view import view

__all__ = [
    "cli",
    "sync",
    "tokens",
    "view",
]
