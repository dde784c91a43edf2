"""Read access to a provider's city → zone → area hierarchy."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from couriersync.domain.models import Area, City, Zone
from couriersync.infrastructure.http import CourierHttpClient, RequestResult
from couriersync.infrastructure.observability import get_logger

from ..providers import ProviderEndpoints

T = TypeVar("T")


class FetchError(Exception):
    """Raised when a catalog endpoint does not answer with a 2xx response."""

    def __init__(self, url: str, status: int | None, message: str) -> None:
        super().__init__(f"{message} ({url}, status={status})")
        self.url = url
        self.status = status


def extract_items(payload: Any) -> list[Mapping[str, Any]]:
    """Return the list nested at ``data.data``, or ``[]`` when malformed."""
    if not isinstance(payload, Mapping):
        return []
    outer = payload.get("data")
    if not isinstance(outer, Mapping):
        return []
    items = outer.get("data")
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, Mapping)]


class RemoteCatalogClient:
    """Authenticated GETs against the three catalog endpoints.

    The access token is resolved once by the caller and reused for every
    request of a run.
    """

    def __init__(
        self,
        http_client: CourierHttpClient,
        endpoints: ProviderEndpoints,
        *,
        access_token: str,
    ) -> None:
        self._http = http_client
        self._endpoints = endpoints
        self._access_token = access_token
        self._logger = get_logger(__name__)

    def list_cities(self) -> list[City]:
        result = self._get(self._endpoints.cities_path, "Failed to fetch cities")
        return self._parse(result, City.from_payload)

    def list_zones(self, city_id: int) -> list[Zone]:
        result = self._get(
            self._endpoints.zones_for(city_id),
            f"Failed to fetch zones for city: {city_id}",
        )
        return self._parse(result, Zone.from_payload)

    def list_areas(self, zone_id: int) -> list[Area]:
        result = self._get(
            self._endpoints.areas_for(zone_id),
            f"Failed to fetch areas for zone: {zone_id}",
        )
        return self._parse(result, Area.from_payload)

    def _get(self, path: str, failure_message: str) -> RequestResult:
        result = self._http.get(path, bearer_token=self._access_token)
        if not result.ok:
            detail = result.error or f"HTTP {result.status}"
            raise FetchError(result.url, result.status, f"{failure_message}: {detail}")
        return result

    def _parse(
        self, result: RequestResult, factory: Callable[[Mapping[str, Any]], T | None]
    ) -> list[T]:
        parsed: list[T] = []
        for item in extract_items(result.payload):
            value = factory(item)
            if value is None:
                self._logger.debug("Skipping unparseable catalog item from %s: %r", result.url, item)
                continue
            parsed.append(value)
        return parsed


__all__ = ["FetchError", "RemoteCatalogClient", "extract_items"]
