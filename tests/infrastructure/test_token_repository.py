from __future__ import annotations

import sqlite3
from pathlib import Path

from couriersync.infrastructure.db.repositories import TokenRepository


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_put_and_get_until_expiry(tmp_path: Path) -> None:
    clock = FakeClock()
    conn = sqlite3.connect(tmp_path / "tokens.db")
    try:
        store = TokenRepository(conn, clock=clock)
        assert store.get("pathao_access_token") is None

        store.put("pathao_access_token", "abc", ttl_seconds=100)
        assert store.get("pathao_access_token") == "abc"

        clock.now += 99
        assert store.get("pathao_access_token") == "abc"

        clock.now += 1
        assert store.get("pathao_access_token") is None
    finally:
        conn.close()


def test_keys_expire_independently(tmp_path: Path) -> None:
    clock = FakeClock()
    conn = sqlite3.connect(tmp_path / "tokens.db")
    try:
        store = TokenRepository(conn, clock=clock)
        store.put("pathao_access_token", "access", ttl_seconds=60)
        store.put("pathao_refresh_token", "refresh", ttl_seconds=3600)

        clock.now += 120
        assert store.get("pathao_access_token") is None
        assert store.get("pathao_refresh_token") == "refresh"
    finally:
        conn.close()


def test_put_overwrites_and_forget_removes(tmp_path: Path) -> None:
    db_path = tmp_path / "tokens.db"
    conn = sqlite3.connect(db_path)
    try:
        store = TokenRepository(conn)
        store.put("pathao_access_token", "old", ttl_seconds=60)
        store.put("pathao_access_token", "new", ttl_seconds=60)
        assert store.get("pathao_access_token") == "new"

        store.forget("pathao_access_token")
        assert store.get("pathao_access_token") is None
    finally:
        conn.close()


def test_tokens_survive_new_connections(tmp_path: Path) -> None:
    db_path = tmp_path / "tokens.db"
    with sqlite3.connect(db_path) as conn:
        TokenRepository(conn).put("pathao_refresh_token", "persisted", ttl_seconds=60)

    conn = sqlite3.connect(db_path)
    try:
        assert TokenRepository(conn).get("pathao_refresh_token") == "persisted"
    finally:
        conn.close()
