"""Registry of courier providers the sync pipeline knows how to talk to.

Each provider is registered under a lower-case command name and describes
its token and catalog endpoints. The orchestrator only sees the resolved
:class:`ProviderDefinition`, so adding a provider means registering it here.
"""

from __future__ import annotations

from dataclasses import dataclass

from couriersync.domain.models import CourierProvider


class UnsupportedProviderError(ValueError):
    """Raised when no handler is registered for a provider name."""


@dataclass(frozen=True)
class ProviderEndpoints:
    """Relative API paths; ``{city_id}`` and ``{zone_id}`` are filled per call."""

    token_path: str
    cities_path: str
    zones_path: str
    areas_path: str

    def zones_for(self, city_id: int) -> str:
        return self.zones_path.format(city_id=city_id)

    def areas_for(self, zone_id: int) -> str:
        return self.areas_path.format(zone_id=zone_id)


@dataclass(frozen=True)
class ProviderDefinition:
    key: str
    provider: CourierProvider
    endpoints: ProviderEndpoints

    @property
    def display_name(self) -> str:
        return self.provider.value

    @property
    def access_token_key(self) -> str:
        return f"{self.key}_access_token"

    @property
    def refresh_token_key(self) -> str:
        return f"{self.key}_refresh_token"


PATHAO = ProviderDefinition(
    key="pathao",
    provider=CourierProvider.PATHAO,
    endpoints=ProviderEndpoints(
        token_path="/aladdin/api/v1/issue-token",
        cities_path="/aladdin/api/v1/city-list",
        zones_path="/aladdin/api/v1/cities/{city_id}/zone-list",
        areas_path="/aladdin/api/v1/zones/{zone_id}/area-list",
    ),
)

_REGISTRY: dict[str, ProviderDefinition] = {}


def register_provider(definition: ProviderDefinition) -> None:
    _REGISTRY[definition.key.lower()] = definition


def get_provider(name: str | None) -> ProviderDefinition:
    """Return the definition registered under ``name`` (case-insensitive)."""
    key = (name or "").strip().lower()
    try:
        return _REGISTRY[key]
    except KeyError:
        raise UnsupportedProviderError(f"Provider '{key}' is not supported.") from None


def supported_providers() -> list[str]:
    return sorted(_REGISTRY)


register_provider(PATHAO)


__all__ = [
    "PATHAO",
    "ProviderDefinition",
    "ProviderEndpoints",
    "UnsupportedProviderError",
    "get_provider",
    "register_provider",
    "supported_providers",
]
