from __future__ import annotations

SCHEMA_VERSION_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL
);
"""


SCHEMA_COURIER_LOCATIONS_SQL = """
CREATE TABLE IF NOT EXISTS courier_locations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    provider_name TEXT NOT NULL,
    city_id INTEGER NOT NULL,
    city_name TEXT NOT NULL,
    zone_id INTEGER NOT NULL,
    zone_name TEXT NOT NULL,
    area_id INTEGER,
    area_name TEXT,
    home_delivery_available INTEGER NOT NULL DEFAULT 0,
    pickup_available INTEGER NOT NULL DEFAULT 0,
    created_at TEXT,
    updated_at TEXT,
    deleted_at TEXT
);
CREATE UNIQUE INDEX IF NOT EXISTS courier_location_unique
    ON courier_locations (provider_name, city_id, zone_id, area_id);
CREATE INDEX IF NOT EXISTS idx_courier_locations_provider ON courier_locations (provider_name);
CREATE INDEX IF NOT EXISTS idx_courier_locations_city_name ON courier_locations (city_name);
CREATE INDEX IF NOT EXISTS idx_courier_locations_zone_name ON courier_locations (zone_name);
CREATE INDEX IF NOT EXISTS idx_courier_locations_area_name ON courier_locations (area_name);
"""

SCHEMA_TOKEN_CACHE_SQL = """
CREATE TABLE IF NOT EXISTS token_cache (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    expires_at REAL NOT NULL,
    updated_at TEXT NOT NULL
);
"""

SCHEMA_SYNC_RUNS_SQL = """
CREATE TABLE IF NOT EXISTS sync_runs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    provider_name TEXT NOT NULL,
    started_at TEXT NOT NULL,
    finished_at TEXT,
    status TEXT,
    processed_count INTEGER DEFAULT 0,
    batch_count INTEGER DEFAULT 0,
    message TEXT
);
CREATE INDEX IF NOT EXISTS idx_sync_runs_provider_name ON sync_runs (provider_name);
"""
