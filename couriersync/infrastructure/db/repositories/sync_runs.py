from __future__ import annotations

from typing import Any

from ..connection import iso_utcnow
from .base import BaseRepository


class SyncRunRepository(BaseRepository):
    """Ledger of sync runs, one row per provider invocation."""

    def start(self, provider_name: str) -> int:
        return self._execute_insert(
            "INSERT INTO sync_runs (provider_name, started_at, status) VALUES (?, ?, ?)",
            (provider_name, iso_utcnow(), "running"),
        )

    def finish(
        self,
        run_id: int,
        *,
        status: str,
        processed_count: int,
        batch_count: int,
        message: str | None,
    ) -> None:
        self._execute(
            """
            UPDATE sync_runs
            SET finished_at = ?, status = ?, processed_count = ?, batch_count = ?, message = ?
            WHERE id = ?
            """,
            (iso_utcnow(), status, processed_count, batch_count, message, run_id),
        )

    def latest(self, provider_name: str | None = None) -> dict[str, Any] | None:
        if provider_name:
            return self._fetch_one_as_dict(
                "SELECT * FROM sync_runs WHERE provider_name = ? ORDER BY id DESC LIMIT 1",
                (provider_name,),
            )
        return self._fetch_one_as_dict("SELECT * FROM sync_runs ORDER BY id DESC LIMIT 1")
