"""HTTP adapters for couriersync.

This package provides the JSON HTTP client used to talk to courier provider
APIs.
"""

from .client import CourierHttpClient, RequestResult

__all__ = [
    "CourierHttpClient",
    "RequestResult",
]
