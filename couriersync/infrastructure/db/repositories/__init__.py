from .locations import CatalogRepository, StorageError
from .sync_runs import SyncRunRepository
from .tokens import TokenRepository

__all__ = [
    "CatalogRepository",
    "StorageError",
    "SyncRunRepository",
    "TokenRepository",
]
