"""Service layer modules for couriersync."""

from .credentials import AuthError, CredentialManager
from .locations import LocationViewService
from .providers import UnsupportedProviderError, get_provider
from .sync import FetchError, RemoteCatalogClient, SyncOrchestrator, SyncResult
from .sync_service import SyncService

__all__ = [
    "AuthError",
    "CredentialManager",
    "FetchError",
    "LocationViewService",
    "RemoteCatalogClient",
    "SyncOrchestrator",
    "SyncResult",
    "SyncService",
    "UnsupportedProviderError",
    "get_provider",
]
