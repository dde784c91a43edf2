"""Infrastructure layer for couriersync.

Holds adapters for SQLite persistence, provider HTTP access and logging.
"""

from . import db, http, observability

__all__ = ["db", "http", "observability"]
