from __future__ import annotations

from couriersync.domain.models import LocationRecord
from couriersync.infrastructure.db.repositories import CatalogRepository

from .base import BaseService


class LocationViewService(BaseService):
    """Read-only access to the stored location catalog."""

    def list_locations(
        self,
        *,
        provider_name: str | None = None,
        city_name: str | None = None,
        limit: int | None = 50,
    ) -> list[LocationRecord]:
        records = self._with_connection(
            lambda conn: CatalogRepository(conn).list(
                provider_name=provider_name, city_name=city_name, limit=limit
            )
        )
        self._logger.debug("Listed %d locations", len(records))
        return records

    def count_locations(self, provider_name: str | None = None) -> int:
        return self._with_connection(
            lambda conn: CatalogRepository(conn).count(provider_name)
        )
