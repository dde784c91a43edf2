from __future__ import annotations

import importlib
import json
import sqlite3
from pathlib import Path

from click.testing import CliRunner

from conftest import BASE_URL, FakeSession, install_catalog, make_areas, make_response

from couriersync.interfaces.cli import cli
from couriersync.services import SyncResult, SyncService

sync_cli_module = importlib.import_module("couriersync.interfaces.cli.sync")


def _write_config(tmp_path: Path, *, with_credentials: bool = True) -> Path:
    pathao = {"base_url": BASE_URL, "client_id": "id", "client_secret": "secret"}
    if with_credentials:
        pathao.update(username="merchant@example.com", password="pw")
    config = {
        "paths": {"db_path": "couriers.db"},
        "http": {"retry_attempts": 1, "backoff_base_seconds": 0},
        "providers": {"pathao": pathao},
    }
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps(config), encoding="utf-8")
    return config_path


def _patch_service(monkeypatch, session: FakeSession) -> None:
    monkeypatch.setattr(sync_cli_module, "configure_logging", lambda **_kwargs: None)
    monkeypatch.setattr(
        sync_cli_module,
        "sync_service",
        lambda ctx: SyncService(ctx.connection_factory, config=ctx.config, session=session),
    )


def _token_and_catalog(session: FakeSession) -> None:
    session.add_json(
        "POST",
        "/aladdin/api/v1/issue-token",
        {"access_token": "tok", "refresh_token": "rt", "expires_in": 3600},
    )
    install_catalog(session, {1: {10: make_areas(10, 4)}})


def test_sync_command_stores_locations(monkeypatch, tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    session = FakeSession()
    _token_and_catalog(session)
    _patch_service(monkeypatch, session)

    result = CliRunner().invoke(cli, ["sync", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert "Starting courier data sync for provider: pathao" in result.output
    assert "Successfully stored 4 Pathao records" in result.output
    assert "Processed 4 records" in result.output

    with sqlite3.connect(tmp_path / "couriers.db") as conn:
        count = conn.execute("SELECT COUNT(*) FROM courier_locations").fetchone()[0]
    assert count == 4


def test_sync_command_rejects_unsupported_provider(monkeypatch, tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    session = FakeSession()
    _patch_service(monkeypatch, session)

    result = CliRunner().invoke(
        cli, ["sync", "--provider", "redx", "--config", str(config_path)]
    )

    assert result.exit_code == 1
    assert "Provider 'redx' is not supported." in result.output
    assert session.calls == []


def test_sync_command_reports_missing_credentials(monkeypatch, tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, with_credentials=False)
    session = FakeSession()
    _patch_service(monkeypatch, session)

    result = CliRunner().invoke(cli, ["sync", "--config", str(config_path)])

    assert result.exit_code == 1
    assert "Configuration error" in result.output
    assert session.calls == []


def test_sync_command_exits_non_zero_on_failed_run(monkeypatch, tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    session = FakeSession()
    session.add("POST", "/aladdin/api/v1/issue-token", make_response(401, {"message": "nope"}))
    _patch_service(monkeypatch, session)

    result = CliRunner().invoke(cli, ["sync", "--config", str(config_path)])

    assert result.exit_code == 1
    assert "Failed to store Pathao courier data" in result.output


def test_sync_command_passes_batch_options(monkeypatch, tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    captured: dict[str, object] = {}

    class StubService:
        def run_sync(self, provider_name, *, batch_size=None, chunk_size=None):
            captured.update(provider=provider_name, batch_size=batch_size, chunk_size=chunk_size)
            return SyncResult(success=True, message="Successfully stored 0 Pathao records in 0 batches")

    monkeypatch.setattr(sync_cli_module, "configure_logging", lambda **_kwargs: None)
    monkeypatch.setattr(sync_cli_module, "sync_service", lambda _ctx: StubService())

    result = CliRunner().invoke(
        cli,
        [
            "sync",
            "--provider",
            "PATHAO",
            "--config",
            str(config_path),
            "--batch-size",
            "20",
            "--chunk-size",
            "5",
        ],
    )

    assert result.exit_code == 0, result.output
    assert captured == {"provider": "pathao", "batch_size": 20, "chunk_size": 5}


def test_sync_command_rejects_zero_batch_size(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, ["sync", "--batch-size", "0"])
    assert result.exit_code == 2


def test_sync_command_lists_supported_providers(monkeypatch, tmp_path: Path) -> None:
    _patch_service(monkeypatch, FakeSession())

    result = CliRunner().invoke(cli, ["sync", "--provider", "dhl"])

    assert result.exit_code == 1
    assert "Supported providers: pathao" in result.output


def test_sync_command_reports_unopenable_database(monkeypatch, tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    session = FakeSession()
    _token_and_catalog(session)
    _patch_service(monkeypatch, session)

    # A directory cannot be opened as a SQLite database file.
    result = CliRunner().invoke(
        cli, ["sync", "--config", str(config_path), "--db", str(tmp_path)]
    )

    assert result.exit_code == 1
    assert "Database error" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert session.calls == []
