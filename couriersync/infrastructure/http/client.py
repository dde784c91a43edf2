"""HTTP client for courier provider APIs.

This module centralises HTTP access to the provider endpoints. It maintains a
:class:`requests.Session`, joins paths onto the configured base URL, attaches
bearer tokens and JSON headers, enforces a finite request timeout and retries
idempotent GET requests with exponential backoff on transient failures.
Responses are returned as :class:`RequestResult` objects; HTTP error statuses
never raise so callers can decide whether a failure is fatal.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

import requests
from requests import Response, Session

from couriersync.infrastructure.observability import get_logger

_RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})


@dataclass
class RequestResult:
    """Result of a single HTTP exchange."""

    url: str
    status: int | None
    payload: Any = None
    text: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return (
            self.error is None
            and self.status is not None
            and 200 <= self.status < 300
        )


class CourierHttpClient:
    """JSON-over-HTTP helper with bearer auth, timeouts and GET retries."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = 30.0,
        retry_attempts: int = 3,
        backoff_base_seconds: float = 0.5,
        session: Session | None = None,
        user_agent: str = "",  # Empty string triggers dynamic version lookup
    ) -> None:
        from couriersync import __version__

        if not user_agent:
            user_agent = f"couriersync/{__version__}"
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.retry_attempts = max(1, retry_attempts)
        self.backoff_base_seconds = max(0.0, backoff_base_seconds)
        self.session = session or requests.Session()
        self.headers = {
            "User-Agent": user_agent,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        self._logger = get_logger(__name__)

    def url_for(self, path: str) -> str:
        return urljoin(self.base_url + "/", path.lstrip("/"))

    def _prepare_headers(self, bearer_token: str | None) -> dict[str, str]:
        headers = dict(self.headers)
        if bearer_token:
            headers["Authorization"] = f"Bearer {bearer_token}"
        return headers

    def _backoff_delay(self, attempt: int) -> float:
        return self.backoff_base_seconds * (2**attempt)

    @staticmethod
    def _to_result(url: str, response: Response) -> RequestResult:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        return RequestResult(
            url=url, status=response.status_code, payload=payload, text=response.text
        )

    def get(self, path: str, *, bearer_token: str | None = None) -> RequestResult:
        """GET ``path`` and return the decoded result, retrying transient failures."""
        url = self.url_for(path)
        headers = self._prepare_headers(bearer_token)
        result = RequestResult(url=url, status=None, error="Unknown error")
        for attempt in range(self.retry_attempts):
            try:
                response = self.session.get(
                    url, headers=headers, timeout=self.timeout_seconds
                )
                result = self._to_result(url, response)
                if response.status_code not in _RETRYABLE_STATUSES:
                    return result
            except requests.RequestException as exc:
                result = RequestResult(url=url, status=None, error=str(exc))
            if attempt < self.retry_attempts - 1:
                self._logger.debug(
                    "Retrying GET %s (attempt %d/%d): %s",
                    url,
                    attempt + 2,
                    self.retry_attempts,
                    result.error or f"HTTP {result.status}",
                )
                time.sleep(self._backoff_delay(attempt))
        return result

    def post_json(
        self,
        path: str,
        payload: dict[str, Any],
        *,
        bearer_token: str | None = None,
    ) -> RequestResult:
        """POST ``payload`` as JSON once and return the decoded result."""
        url = self.url_for(path)
        try:
            response = self.session.post(
                url,
                json=payload,
                headers=self._prepare_headers(bearer_token),
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            return RequestResult(url=url, status=None, error=str(exc))
        return self._to_result(url, response)

    def close(self) -> None:
        self.session.close()


__all__ = ["CourierHttpClient", "RequestResult"]
