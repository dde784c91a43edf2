from __future__ import annotations

import sqlite3
from collections.abc import Mapping
from typing import Any

from requests import Session

from couriersync.app.config import (
    get_http_settings,
    get_provider_config,
    get_sync_settings,
)
from couriersync.infrastructure.db.repositories import (
    CatalogRepository,
    SyncRunRepository,
    TokenRepository,
)
from couriersync.infrastructure.http import CourierHttpClient

from .base import BaseService, ConnectionFactory
from .credentials import CredentialManager
from .providers import get_provider
from .sync import SyncOrchestrator, SyncResult


class SyncService(BaseService):
    """Coordinate a catalog sync for one provider.

    Resolves the provider handler and validates its configuration before any
    network call, wires the HTTP client, token cache, credential manager and
    catalog repository onto one SQLite connection, and records every run in
    the ``sync_runs`` table.
    """

    def __init__(
        self,
        connection_factory: ConnectionFactory,
        *,
        config: Mapping[str, Any] | None = None,
        session: Session | None = None,
    ) -> None:
        super().__init__(connection_factory)
        self._config: Mapping[str, Any] = config or {}
        self._session = session

    def run_sync(
        self,
        provider_name: str,
        *,
        batch_size: int | None = None,
        chunk_size: int | None = None,
    ) -> SyncResult:
        """Run a full catalog sync.

        Raises:
            UnsupportedProviderError: If no handler exists for ``provider_name``.
            ConfigError: If the provider's configuration is incomplete.
        """
        provider = get_provider(provider_name)
        provider_config = get_provider_config(provider.key, self._config)
        http_settings = get_http_settings(self._config)
        sync_settings = get_sync_settings(self._config)

        http_client = CourierHttpClient(
            base_url=provider_config.base_url,
            timeout_seconds=http_settings.timeout_seconds,
            retry_attempts=http_settings.retry_attempts,
            backoff_base_seconds=http_settings.backoff_base_seconds,
            session=self._session,
        )

        def _run(conn: sqlite3.Connection) -> SyncResult:
            runs = SyncRunRepository(conn)
            run_id = runs.start(provider.display_name)
            credentials = CredentialManager(
                provider=provider,
                config=provider_config,
                http_client=http_client,
                token_store=TokenRepository(conn),
            )
            orchestrator = SyncOrchestrator(
                provider=provider,
                credentials=credentials,
                http_client=http_client,
                repository=CatalogRepository(conn),
                batch_size=batch_size or sync_settings.batch_size,
                chunk_size=chunk_size or sync_settings.chunk_size,
            )
            result = orchestrator.run()
            runs.finish(
                run_id,
                status="success" if result.success else "failed",
                processed_count=result.processed_count,
                batch_count=result.batch_count,
                message=result.message,
            )
            return result

        self._logger.info("Starting courier data sync for provider: %s", provider.key)
        try:
            return self._with_connection(_run)
        finally:
            if self._session is None:
                http_client.close()

    def clear_tokens(self, provider_name: str) -> None:
        """Forget the cached access and refresh tokens of a provider."""
        provider = get_provider(provider_name)

        def _clear(conn: sqlite3.Connection) -> None:
            store = TokenRepository(conn)
            store.forget(provider.access_token_key)
            store.forget(provider.refresh_token_key)

        self._with_connection(_clear)
        self._logger.info("Cleared cached tokens for provider: %s", provider.key)
