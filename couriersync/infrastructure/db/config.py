"""Lookup of the project ``config.json`` and the database settings inside it.

The file is resolved from an explicit path, then the ``COURIERSYNC_CONFIG``
environment variable, then ``config.json`` at the project root. A missing file
yields an empty configuration. Relative paths inside the file are resolved
against the directory holding it.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

CONFIG_ENV_VAR = "COURIERSYNC_CONFIG"
DEFAULT_DB_TIMEOUT = 30.0

_REPO_ROOT = Path(__file__).resolve().parents[3]
_CONFIG_FILE = _REPO_ROOT / "config.json"


@dataclass(frozen=True)
class DatabaseSettings:
    db_path: Path
    timeout_seconds: float = DEFAULT_DB_TIMEOUT
    enable_wal: bool = True


def resolve_config_path(config_path: Path | str | None = None) -> Path:
    if config_path is not None:
        return Path(config_path)
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser()
    return _CONFIG_FILE


def load_config(config_path: Path | str | None = None) -> Dict[str, Any]:
    """Return the parsed configuration file, or ``{}`` when it does not exist."""

    path = resolve_config_path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def get_path_config(config_path: Path | str | None = None) -> Dict[str, Path]:
    """Return absolute filesystem paths named under ``paths`` in the configuration."""

    path = resolve_config_path(config_path)
    cfg = load_config(path)
    root = path.parent
    paths_cfg = cfg.get("paths") if isinstance(cfg.get("paths"), dict) else {}
    db_path = Path(paths_cfg.get("db_path", "couriersync.db")).expanduser()
    if not db_path.is_absolute():
        db_path = (root / db_path).resolve()
    return {"db_path": db_path}


def get_database_settings(config_path: Path | str | None = None) -> DatabaseSettings:
    cfg = load_config(config_path)
    try:
        timeout = float(cfg.get("db_timeout_seconds", DEFAULT_DB_TIMEOUT))
    except (TypeError, ValueError):
        timeout = DEFAULT_DB_TIMEOUT
    db_cfg = cfg.get("db") if isinstance(cfg.get("db"), dict) else {}
    return DatabaseSettings(
        db_path=get_path_config(config_path)["db_path"],
        timeout_seconds=timeout,
        enable_wal=bool(db_cfg.get("enable_wal", True)),
    )
