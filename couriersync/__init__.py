"""
couriersync package initializer.

This package synchronizes courier provider location catalogs (cities, zones
and areas) into a local SQLite store.

The package exposes a ``__version__`` attribute indicating the installed
version of couriersync. The version is read from pyproject.toml via
importlib.metadata – this is the single source of truth.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("couriersync")
except PackageNotFoundError:
    # Package is not installed (running from source without pip install -e .)
    __version__ = "0.0.0.dev"

__all__: list[str] = ["__version__"]
