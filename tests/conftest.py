from __future__ import annotations

import json
from pathlib import Path
import sys
from typing import Any
from urllib.parse import urlsplit

import pytest
from requests import Response

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

BASE_URL = "https://api.courier.example"


def make_response(status: int = 200, payload: Any = None, text: str | None = None) -> Response:
    resp = Response()
    resp.status_code = status
    if payload is not None:
        resp._content = json.dumps(payload).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = (text or "").encode("utf-8")
    resp.encoding = "utf-8"
    return resp


class FakeSession:
    """Stand-in for ``requests.Session`` that serves canned responses by path.

    A route may hold a single response, an exception to raise, or a list of
    those served in order (the last entry repeats).
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Any] = {}
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def add(self, method: str, path: str, response: Any) -> None:
        self.routes[(method.upper(), path)] = response

    def add_json(self, method: str, path: str, payload: Any, status: int = 200) -> None:
        self.add(method, path, make_response(status, payload))

    def calls_to(self, path: str, method: str | None = None) -> list[dict[str, Any]]:
        return [
            call
            for call in self.calls
            if call["path"] == path and (method is None or call["method"] == method)
        ]

    def _dispatch(self, method: str, url: str, **kwargs: Any) -> Response:
        path = urlsplit(url).path
        self.calls.append({"method": method, "url": url, "path": path, **kwargs})
        route = self.routes.get((method, path))
        if isinstance(route, list):
            route = route.pop(0) if len(route) > 1 else route[0]
        if route is None:
            return make_response(404, {"message": "not found"})
        if isinstance(route, BaseException):
            raise route
        return route

    def get(self, url: str, **kwargs: Any) -> Response:
        return self._dispatch("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> Response:
        return self._dispatch("POST", url, **kwargs)

    def close(self) -> None:
        self.closed = True


def envelope(items: list[dict[str, Any]]) -> dict[str, Any]:
    return {"code": 200, "type": "success", "data": {"data": items}}


def install_catalog(session: FakeSession, tree: dict[int, dict[int, list[dict[str, Any]]]]) -> None:
    """Register Pathao catalog routes for ``{city_id: {zone_id: [areas]}}``."""
    session.add_json(
        "GET",
        "/aladdin/api/v1/city-list",
        envelope([{"city_id": cid, "city_name": f"City {cid}"} for cid in tree]),
    )
    for city_id, zones in tree.items():
        session.add_json(
            "GET",
            f"/aladdin/api/v1/cities/{city_id}/zone-list",
            envelope([{"zone_id": zid, "zone_name": f"Zone {zid}"} for zid in zones]),
        )
        for zone_id, areas in zones.items():
            session.add_json(
                "GET", f"/aladdin/api/v1/zones/{zone_id}/area-list", envelope(areas)
            )


def make_areas(zone_id: int, count: int, **flags: Any) -> list[dict[str, Any]]:
    return [
        {"area_id": zone_id * 1000 + idx, "area_name": f"Area {zone_id}-{idx}", **flags}
        for idx in range(count)
    ]


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    monkeypatch.delenv("COURIERSYNC_CONFIG", raising=False)
