"""Application layer.

Holds the typed configuration consumed by services and the CLI.
"""

from . import config

__all__ = ["config"]
