"""Synchronization of a provider's location catalog into the local database."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Protocol, TypeVar

from couriersync.domain.models import LocationRecord
from couriersync.infrastructure.db.repositories import StorageError
from couriersync.infrastructure.http import CourierHttpClient
from couriersync.infrastructure.observability import (
    get_logger,
    log_context,
    log_exception,
)

from ..credentials import AuthError
from ..providers import ProviderDefinition
from .catalog import FetchError, RemoteCatalogClient

T = TypeVar("T")

DEFAULT_BATCH_SIZE = 50
DEFAULT_CHUNK_SIZE = 10

_logger = get_logger(__name__)


class AccessTokenProvider(Protocol):
    def get_valid_access_token(self) -> str: ...


class LocationWriter(Protocol):
    def upsert_batch(self, records: Sequence[LocationRecord]) -> int: ...


@dataclass
class SyncResult:
    success: bool
    message: str
    processed_count: int = 0
    batch_count: int = 0


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive slices of ``items`` holding at most ``size`` elements."""
    if size < 1:
        raise ValueError("chunk size must be at least 1")
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


class _BatchBuffer:
    """Accumulates records and writes them in batches of ``batch_size``."""

    def __init__(self, repository: LocationWriter, batch_size: int) -> None:
        self._repository = repository
        self._batch_size = batch_size
        self._records: list[LocationRecord] = []
        self.processed_count = 0
        self.batch_count = 0

    def __len__(self) -> int:
        return len(self._records)

    def add(self, record: LocationRecord) -> None:
        self._records.append(record)
        if len(self._records) >= self._batch_size:
            self.flush()

    def flush(self) -> None:
        if not self._records:
            return
        self._repository.upsert_batch(self._records)
        self.processed_count += len(self._records)
        self.batch_count += 1
        self._records = []


class SyncOrchestrator:
    """Walk cities → zones → areas and upsert the flattened locations.

    Requests are issued sequentially. A failed zone list skips its city and a
    failed area list skips its zone; a failed city list, an authentication
    failure or a storage error aborts the whole run.
    """

    def __init__(
        self,
        *,
        provider: ProviderDefinition,
        credentials: AccessTokenProvider,
        http_client: CourierHttpClient,
        repository: LocationWriter,
        batch_size: int = DEFAULT_BATCH_SIZE,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        self.provider = provider
        self.batch_size = batch_size
        self.chunk_size = chunk_size
        self._credentials = credentials
        self._http = http_client
        self._repository = repository

    def run(self) -> SyncResult:
        name = self.provider.display_name
        with log_context(provider=self.provider.key):
            try:
                access_token = self._credentials.get_valid_access_token()
                catalog = RemoteCatalogClient(
                    self._http, self.provider.endpoints, access_token=access_token
                )
                buffer = self._walk(catalog)
            except (AuthError, FetchError, StorageError) as exc:
                _logger.error("Error storing %s courier data: %s", name, exc)
                return SyncResult(
                    success=False, message=f"Failed to store {name} courier data: {exc}"
                )
            except Exception as exc:
                log_exception(_logger, f"Unexpected error storing {name} courier data", exc)
                return SyncResult(
                    success=False, message=f"Failed to store {name} courier data: {exc}"
                )

        _logger.info(
            "Stored %d %s records in %d batches",
            buffer.processed_count,
            name,
            buffer.batch_count,
        )
        return SyncResult(
            success=True,
            message=(
                f"Successfully stored {buffer.processed_count} {name} records "
                f"in {buffer.batch_count} batches"
            ),
            processed_count=buffer.processed_count,
            batch_count=buffer.batch_count,
        )

    def _walk(self, catalog: RemoteCatalogClient) -> _BatchBuffer:
        cities = catalog.list_cities()
        _logger.info("Fetched %d cities", len(cities))
        buffer = _BatchBuffer(self._repository, self.batch_size)

        for city in cities:
            with log_context(city_id=city.city_id):
                try:
                    zones = catalog.list_zones(city.city_id)
                except FetchError as exc:
                    _logger.warning("Skipping city %s: %s", city.city_id, exc)
                    continue

                _logger.info("Fetched %d zones for city %s", len(zones), city.city_id)

                for zone_chunk in chunked(zones, self.chunk_size):
                    for zone in zone_chunk:
                        try:
                            areas = catalog.list_areas(zone.zone_id)
                        except FetchError as exc:
                            _logger.warning("Skipping zone %s: %s", zone.zone_id, exc)
                            continue

                        for area in areas:
                            if area.area_id is None:
                                _logger.warning(
                                    "Skipping area without area_id in zone %s", zone.zone_id
                                )
                                continue
                            buffer.add(
                                LocationRecord.build(self.provider.provider, city, zone, area)
                            )

                    # Remaining records are written at every chunk boundary.
                    buffer.flush()

                _logger.debug("Finished city %s (%d zones)", city.city_id, len(zones))

        return buffer


__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_CHUNK_SIZE",
    "SyncOrchestrator",
    "SyncResult",
    "chunked",
]
