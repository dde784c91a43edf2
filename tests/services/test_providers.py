from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from conftest import BASE_URL, FakeSession, envelope

from couriersync.domain.models import CourierProvider
from couriersync.infrastructure.db.repositories import CatalogRepository
from couriersync.infrastructure.http import CourierHttpClient
from couriersync.services import providers
from couriersync.services.providers import (
    PATHAO,
    ProviderDefinition,
    ProviderEndpoints,
    UnsupportedProviderError,
    get_provider,
    register_provider,
    supported_providers,
)
from couriersync.services.sync import SyncOrchestrator

REDX = ProviderDefinition(
    key="redx",
    provider=CourierProvider.REDX,
    endpoints=ProviderEndpoints(
        token_path="/v1/token",
        cities_path="/v1/cities",
        zones_path="/v1/cities/{city_id}/zones",
        areas_path="/v1/zones/{zone_id}/areas",
    ),
)


class StaticToken:
    def get_valid_access_token(self) -> str:
        return "tok"


@pytest.fixture
def registry(monkeypatch):
    monkeypatch.setattr(providers, "_REGISTRY", dict(providers._REGISTRY))


def test_builtin_registry() -> None:
    assert get_provider(" Pathao ") is PATHAO
    assert supported_providers() == ["pathao"]
    assert PATHAO.endpoints.zones_for(3) == "/aladdin/api/v1/cities/3/zone-list"
    assert PATHAO.access_token_key == "pathao_access_token"
    with pytest.raises(UnsupportedProviderError, match="Provider 'redx' is not supported."):
        get_provider("redx")


def test_registered_provider_is_resolved(registry) -> None:
    register_provider(REDX)

    assert get_provider("REDX") is REDX
    assert supported_providers() == ["pathao", "redx"]
    assert REDX.refresh_token_key == "redx_refresh_token"


def test_registered_provider_syncs_through_its_endpoints(registry, tmp_path: Path) -> None:
    register_provider(REDX)
    provider = get_provider("redx")
    session = FakeSession()
    session.add_json("GET", "/v1/cities", envelope([{"city_id": 1, "city_name": "Dhaka"}]))
    session.add_json("GET", "/v1/cities/1/zones", envelope([{"zone_id": 5, "zone_name": "Mirpur"}]))
    session.add_json(
        "GET", "/v1/zones/5/areas", envelope([{"area_id": 50, "area_name": "Section 10"}])
    )

    conn = sqlite3.connect(tmp_path / "redx.db")
    try:
        repo = CatalogRepository(conn)
        result = SyncOrchestrator(
            provider=provider,
            credentials=StaticToken(),
            http_client=CourierHttpClient(base_url=BASE_URL, session=session),
            repository=repo,
        ).run()

        assert result.success
        assert result.message == "Successfully stored 1 Redx records in 1 batches"
        stored = repo.get("Redx", 1, 5, 50)
        assert stored is not None and stored.area_name == "Section 10"
        assert repo.count("Pathao") == 0
    finally:
        conn.close()
    assert not any(call["path"].startswith("/aladdin") for call in session.calls)
