"""Sync services for fetching and persisting provider location catalogs.

This package is the official API for walking a provider's city → zone →
area hierarchy and upserting it into the local database. Import from here
rather than from the ``.catalog`` or ``.sync`` submodules.

Public API:
  - SyncOrchestrator – Sequential walk with batched upserts
  - SyncResult – Aggregate success/failure with counts
  - RemoteCatalogClient – Authenticated catalog reads
  - FetchError – Recoverable catalog fetch failure
  - chunked() – Fixed-size partitioning helper
"""

from .catalog import FetchError, RemoteCatalogClient, extract_items
from .sync import (DEFAULT_BATCH_SIZE, DEFAULT_CHUNK_SIZE, SyncOrchestrator,
                   SyncResult, chunked)

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_CHUNK_SIZE",
    "FetchError",
    "RemoteCatalogClient",
    "SyncOrchestrator",
    "SyncResult",
    "chunked",
    "extract_items",
]
