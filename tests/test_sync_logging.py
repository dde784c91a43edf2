import logging
import sqlite3

import pytest

from conftest import BASE_URL, FakeSession, install_catalog, make_areas

from couriersync.infrastructure.db.repositories import CatalogRepository
from couriersync.infrastructure.http import CourierHttpClient
from couriersync.infrastructure.observability import logging as logging_module
from couriersync.infrastructure.observability import (
    ContextualFormatter,
    configure_logging,
    log_context,
)
from couriersync.services.providers import PATHAO
from couriersync.services.sync import SyncOrchestrator


class StaticToken:
    def get_valid_access_token(self) -> str:
        return "tok"


@pytest.fixture
def fresh_logging(monkeypatch):
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    monkeypatch.setattr(logging_module, "_configured", False)
    yield
    for handler in root.handlers[:]:
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(saved_level)


def test_contextual_formatter_appends_fields() -> None:
    formatter = ContextualFormatter("%(message)s")
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "Fetching zones", None, None)

    with log_context(provider="pathao"):
        with log_context(city_id=3):
            assert formatter.format(record) == "Fetching zones [provider=pathao city_id=3]"
        assert formatter.format(record) == "Fetching zones [provider=pathao]"
    assert formatter.format(record) == "Fetching zones"


def test_sync_run_writes_log_file(fresh_logging, tmp_path) -> None:
    log_file = tmp_path / "logs" / "sync.log"
    configure_logging(level=logging.DEBUG, log_path=log_file)

    session = FakeSession()
    install_catalog(session, {4: {40: make_areas(40, 2)}})
    conn = sqlite3.connect(tmp_path / "sync.db")
    try:
        SyncOrchestrator(
            provider=PATHAO,
            credentials=StaticToken(),
            http_client=CourierHttpClient(base_url=BASE_URL, session=session),
            repository=CatalogRepository(conn),
        ).run()
    finally:
        conn.close()

    contents = log_file.read_text(encoding="utf-8")
    assert "Fetched 1 cities [provider=pathao]" in contents
    assert "city_id=4" in contents
    assert "Stored 2 Pathao records in 1 batches" in contents


def test_configure_logging_takes_over_import_time_loggers(fresh_logging, monkeypatch, tmp_path) -> None:
    import couriersync.interfaces.cli.__main__  # noqa: F401

    monkeypatch.setattr(logging_module, "_fallback_loggers", [])
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    early = logging.getLogger("couriersync.tests.early_import")
    monkeypatch.setattr(early, "handlers", [])
    assert logging_module.get_logger("couriersync.tests.early_import") is early
    assert early.handlers and early.level == logging.INFO

    log_file = tmp_path / "verbose.log"
    configure_logging(level=logging.DEBUG, log_path=log_file)

    assert early.handlers == []
    assert early.isEnabledFor(logging.DEBUG)
    early.debug("only once")
    for handler in root.handlers:
        handler.flush()
    assert log_file.read_text(encoding="utf-8").count("only once") == 1
