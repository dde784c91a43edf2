from __future__ import annotations

import sqlite3
from collections.abc import Sequence
from typing import Any

from couriersync.domain.models import LocationRecord

from ..connection import iso_utcnow
from .base import BaseRepository


class StorageError(Exception):
    """Raised when a batch of location records cannot be persisted."""


_UPSERT_SQL = """
INSERT INTO courier_locations (
    provider_name, city_id, city_name, zone_id, zone_name, area_id, area_name,
    home_delivery_available, pickup_available, created_at, updated_at
)
VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
ON CONFLICT(provider_name, city_id, zone_id, area_id) DO UPDATE SET
    city_name = excluded.city_name,
    zone_name = excluded.zone_name,
    area_name = excluded.area_name,
    home_delivery_available = excluded.home_delivery_available,
    pickup_available = excluded.pickup_available,
    updated_at = excluded.updated_at
"""

_SELECT_COLUMNS = """
    provider_name, city_id, city_name, zone_id, zone_name, area_id, area_name,
    home_delivery_available, pickup_available, created_at, updated_at, deleted_at
"""


class CatalogRepository(BaseRepository):
    """Persistence for the flattened courier location catalog."""

    def upsert_batch(self, records: Sequence[LocationRecord]) -> int:
        """Insert or update ``records`` in a single transaction.

        Rows are matched on ``(provider_name, city_id, zone_id, area_id)``.
        Existing rows get their names, availability flags and ``updated_at``
        refreshed; ``created_at`` is only written on insert. Either the whole
        batch is applied or :class:`StorageError` is raised and nothing is.
        """
        if not records:
            return 0
        now = iso_utcnow()
        params = [
            (
                record.provider_name,
                record.city_id,
                record.city_name,
                record.zone_id,
                record.zone_name,
                record.area_id,
                record.area_name,
                int(record.home_delivery_available),
                int(record.pickup_available),
                now,
                now,
            )
            for record in records
        ]
        try:
            with self._transaction() as conn:
                conn.executemany(_UPSERT_SQL, params)
        except sqlite3.Error as exc:
            raise StorageError(
                f"Failed to upsert batch of {len(records)} location records: {exc}"
            ) from exc
        return len(records)

    def get(
        self, provider_name: str, city_id: int, zone_id: int, area_id: int | None
    ) -> LocationRecord | None:
        row = self._fetch_one_as_dict(
            f"SELECT {_SELECT_COLUMNS} FROM courier_locations "
            "WHERE provider_name = ? AND city_id = ? AND zone_id = ? AND area_id IS ?",
            (provider_name, city_id, zone_id, area_id),
        )
        return LocationRecord.from_dict(row) if row else None

    def count(self, provider_name: str | None = None) -> int:
        query = "SELECT COUNT(*) FROM courier_locations WHERE deleted_at IS NULL"
        params: tuple[Any, ...] = ()
        if provider_name:
            query += " AND provider_name = ?"
            params = (provider_name,)
        return int(self._fetch_scalar(query, params) or 0)

    def list(
        self,
        *,
        provider_name: str | None = None,
        city_name: str | None = None,
        limit: int | None = 50,
    ) -> list[LocationRecord]:
        conditions = ["deleted_at IS NULL"]
        params: list[Any] = []
        if provider_name:
            conditions.append("provider_name = ?")
            params.append(provider_name)
        if city_name:
            conditions.append("city_name LIKE ?")
            params.append(f"%{city_name}%")
        query = (
            f"SELECT {_SELECT_COLUMNS} FROM courier_locations "
            f"WHERE {' AND '.join(conditions)} "
            "ORDER BY provider_name, city_name, zone_name, area_name"
        )
        if limit:
            query += " LIMIT ?"
            params.append(int(limit))
        rows = self._fetch_all_as_dicts(query, tuple(params))
        return [LocationRecord.from_dict(row) for row in rows]
