"""Bearer token lifecycle for provider APIs.

:class:`CredentialManager` resolves a usable access token in three steps:
the cached access token, a refresh-token grant, then a password grant using
the configured client credentials. Every successful grant is written back to
the token cache so later runs can skip the network entirely.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from couriersync.app.config import ProviderConfig
from couriersync.infrastructure.http import CourierHttpClient, RequestResult
from couriersync.infrastructure.observability import get_logger

from .providers import ProviderDefinition

# Access tokens are cached slightly shorter than their real lifetime.
ACCESS_TOKEN_EXPIRY_MARGIN_SECONDS = 60
REFRESH_TOKEN_TTL_SECONDS = 7 * 24 * 60 * 60


class AuthError(Exception):
    """Raised when no grant exchange produced an access token."""

    def __init__(self, message: str, *, status: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class TokenStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def put(self, key: str, value: str, ttl_seconds: float) -> None: ...

    def forget(self, key: str) -> None: ...


@dataclass(frozen=True)
class TokenGrant:
    access_token: str | None
    refresh_token: str | None = None
    expires_in: int | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "TokenGrant":
        if not isinstance(payload, Mapping):
            return cls(access_token=None)
        expires_in = payload.get("expires_in")
        try:
            expires_in = int(expires_in) if expires_in is not None else None
        except (TypeError, ValueError):
            expires_in = None
        return cls(
            access_token=payload.get("access_token") or None,
            refresh_token=payload.get("refresh_token") or None,
            expires_in=expires_in,
        )


class CredentialManager:
    """Obtain a valid access token, preferring cache over network grants.

    The manager performs read-then-write on the token store without locking;
    sync runs for one provider are expected to be serialized by the caller.
    """

    def __init__(
        self,
        *,
        provider: ProviderDefinition,
        config: ProviderConfig,
        http_client: CourierHttpClient,
        token_store: TokenStore,
    ) -> None:
        self._provider = provider
        self._config = config
        self._http = http_client
        self._store = token_store
        self._logger = get_logger(__name__)

    def get_valid_access_token(self) -> str:
        """Return a usable access token.

        Raises:
            AuthError: If the password grant fails after the cache and the
                refresh grant could not supply a token.
        """
        cached = self._store.get(self._provider.access_token_key)
        if cached:
            return cached

        refresh_token = self._store.get(self._provider.refresh_token_key)
        if refresh_token:
            token = self._refresh_access_token(refresh_token)
            if token:
                return token

        return self._request_new_access_token()

    def clear(self) -> None:
        self._store.forget(self._provider.access_token_key)
        self._store.forget(self._provider.refresh_token_key)

    def _grant_payload(self, grant_type: str, **extra: str) -> dict[str, str]:
        return {
            "client_id": self._config.client_id,
            "client_secret": self._config.client_secret,
            "grant_type": grant_type,
            **extra,
        }

    def _issue_token(self, payload: dict[str, str]) -> RequestResult:
        return self._http.post_json(self._provider.endpoints.token_path, payload)

    def _refresh_access_token(self, refresh_token: str) -> str | None:
        result = self._issue_token(
            self._grant_payload("refresh_token", refresh_token=refresh_token)
        )
        if not result.ok:
            self._logger.warning(
                "Failed to refresh %s token: %s",
                self._provider.display_name,
                result.error or result.text,
            )
            return None

        grant = TokenGrant.from_payload(result.payload)
        if not grant.access_token:
            self._logger.warning(
                "Refresh grant for %s returned no access token", self._provider.display_name
            )
            return None
        self._store_grant(grant)
        return grant.access_token

    def _request_new_access_token(self) -> str:
        result = self._issue_token(
            self._grant_payload(
                "password",
                username=self._config.username,
                password=self._config.password,
            )
        )
        body = result.error or result.text
        if not result.ok:
            raise AuthError(
                f"Failed to get {self._provider.display_name} access token: {body}",
                status=result.status,
                body=body,
            )

        grant = TokenGrant.from_payload(result.payload)
        if not grant.access_token:
            raise AuthError(
                f"{self._provider.display_name} token response had no access_token: {body}",
                status=result.status,
                body=body,
            )
        self._store_grant(grant)
        return grant.access_token

    def _store_grant(self, grant: TokenGrant) -> None:
        if grant.access_token and grant.expires_in:
            ttl = grant.expires_in - ACCESS_TOKEN_EXPIRY_MARGIN_SECONDS
            if ttl > 0:
                self._store.put(self._provider.access_token_key, grant.access_token, ttl)
            else:
                self._logger.debug(
                    "Not caching %s access token; lifetime %ss is too short",
                    self._provider.display_name,
                    grant.expires_in,
                )

        if grant.refresh_token:
            self._store.put(
                self._provider.refresh_token_key,
                grant.refresh_token,
                REFRESH_TOKEN_TTL_SECONDS,
            )


__all__ = [
    "ACCESS_TOKEN_EXPIRY_MARGIN_SECONDS",
    "AuthError",
    "CredentialManager",
    "REFRESH_TOKEN_TTL_SECONDS",
    "TokenGrant",
    "TokenStore",
]
