from .config import (CONFIG_ENV_VAR, DEFAULT_DB_TIMEOUT, DatabaseSettings,
                     get_database_settings, get_path_config, load_config,
                     resolve_config_path)
from .connection import DatabaseError, apply_pragmas, get_connection, iso_utcnow
from .schema import CURRENT_SCHEMA_VERSION, SchemaMigrator, ensure_schema

__all__ = [
    "CONFIG_ENV_VAR",
    "CURRENT_SCHEMA_VERSION",
    "DEFAULT_DB_TIMEOUT",
    "DatabaseError",
    "DatabaseSettings",
    "apply_pragmas",
    "ensure_schema",
    "get_connection",
    "get_database_settings",
    "get_path_config",
    "iso_utcnow",
    "load_config",
    "resolve_config_path",
    "SchemaMigrator",
]
