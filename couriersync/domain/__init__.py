"""Domain layer facade for couriersync.

This package groups the pure business models that do not concern
infrastructure or interface details.
"""

from . import models

__all__ = ["models"]
