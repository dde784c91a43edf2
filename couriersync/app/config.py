"""Configuration utilities for couriersync.

Builds typed settings for providers, HTTP access and the sync walk from the
JSON project configuration (see :func:`couriersync.infrastructure.db.load_config`).
Provider credentials are validated here, before any network call is made.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping

from couriersync.infrastructure.db import load_config as load_project_config


class ConfigError(ValueError):
    """Raised when required configuration is missing or invalid."""


@dataclass(frozen=True)
class ProviderConfig:
    """Credentials and base URL for a single courier provider."""

    base_url: str
    client_id: str
    client_secret: str
    username: str
    password: str

    @classmethod
    def from_mapping(cls, name: str, data: Mapping[str, Any]) -> "ProviderConfig":
        values = {f.name: str(data.get(f.name) or "").strip() for f in fields(cls)}
        missing = [key for key, value in values.items() if not value]
        if missing:
            raise ConfigError(
                f"Provider '{name}' is missing required configuration: {', '.join(missing)}"
            )
        return cls(**values)


@dataclass(frozen=True)
class HttpSettings:
    timeout_seconds: float = 30.0
    retry_attempts: int = 3
    backoff_base_seconds: float = 0.5


@dataclass(frozen=True)
class SyncSettings:
    batch_size: int = 50
    chunk_size: int = 10


def load_config(path: str | Path | None = None) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file. Defaults to ``config.json``
            at the project root; a missing default file yields ``{}``.
    """
    if path is not None and not Path(path).exists():
        raise ConfigError(f"Configuration file not found: {path}")
    return load_project_config(path)


def _section(config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = config.get(name, {})
    if not isinstance(section, Mapping):
        raise ConfigError(f"Configuration section '{name}' must be an object")
    return section


def get_provider_config(name: str, config: Mapping[str, Any]) -> ProviderConfig:
    """Return validated credentials for provider ``name`` (case-insensitive)."""
    providers = _section(config, "providers")
    normalized = name.strip().lower()
    for key, value in providers.items():
        if str(key).lower() == normalized and isinstance(value, Mapping):
            return ProviderConfig.from_mapping(normalized, value)
    raise ConfigError(f"No configuration found for provider '{normalized}'")


def get_http_settings(config: Mapping[str, Any]) -> HttpSettings:
    section = _section(config, "http")
    defaults = HttpSettings()
    try:
        return HttpSettings(
            timeout_seconds=float(section.get("timeout_seconds", defaults.timeout_seconds)),
            retry_attempts=int(section.get("retry_attempts", defaults.retry_attempts)),
            backoff_base_seconds=float(
                section.get("backoff_base_seconds", defaults.backoff_base_seconds)
            ),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid http configuration: {exc}") from exc


def get_sync_settings(config: Mapping[str, Any]) -> SyncSettings:
    section = _section(config, "sync")
    defaults = SyncSettings()
    try:
        settings = SyncSettings(
            batch_size=int(section.get("batch_size", defaults.batch_size)),
            chunk_size=int(section.get("chunk_size", defaults.chunk_size)),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid sync configuration: {exc}") from exc
    if settings.batch_size < 1 or settings.chunk_size < 1:
        raise ConfigError("sync.batch_size and sync.chunk_size must be at least 1")
    return settings


__all__ = [
    "ConfigError",
    "HttpSettings",
    "ProviderConfig",
    "SyncSettings",
    "get_http_settings",
    "get_provider_config",
    "get_sync_settings",
    "load_config",
]
