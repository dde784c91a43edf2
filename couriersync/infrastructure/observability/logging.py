"""Logging setup and contextual log fields for couriersync.

Entry points call :func:`configure_logging` once; library code only asks for
loggers through :func:`get_logger`. Fields bound with :func:`log_context`
(provider, city id, ...) are appended to every record emitted inside the block.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Iterator

_DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers of HTTP libraries that are too chatty at INFO/DEBUG.
_NOISY_LOGGERS = ("urllib3", "requests", "charset_normalizer")

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})
_configured = False
_fallback_loggers: list[logging.Logger] = []


class _FallbackHandler(logging.StreamHandler):
    """stderr handler attached by get_logger before logging is configured."""


class ContextualFormatter(logging.Formatter):
    """Formatter that appends the active ``log_context`` fields as ``[k=v ...]``."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = _log_context.get()
        if not fields:
            return message
        rendered = " ".join(f"{key}={value}" for key, value in fields.items())
        return f"{message} [{rendered}]"


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Bind ``fields`` to log records for the duration of the block.

    Nested blocks extend the outer fields; leaving a block restores them::

        with log_context(provider="pathao"):
            with log_context(city_id=1):
                logger.info("Fetched 12 zones")  # ... [provider=pathao city_id=1]
    """
    token = _log_context.set({**_log_context.get(), **fields})
    try:
        yield
    finally:
        _log_context.reset(token)


def configure_logging(
    level: int = logging.INFO,
    third_party_level: int = logging.WARNING,
    log_path: str | Path | None = None,
) -> None:
    """Route all records to stderr and, when ``log_path`` is given, to a file.

    Only the first call has an effect, so commands may call it unconditionally.
    """
    global _configured
    if _configured:
        return
    _configured = True

    formatter = ContextualFormatter(_DEFAULT_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_path:
        path = Path(log_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    # Loggers created at import time hand their records to the root handlers from now on.
    for logger in _fallback_loggers:
        for handler in logger.handlers[:]:
            if isinstance(handler, _FallbackHandler):
                logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
    _fallback_loggers.clear()

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``.

    Before :func:`configure_logging` has run and while the root logger has no
    handlers, the logger gets its own stderr handler so records are not lost.
    """
    logger = logging.getLogger(name)
    if not _configured and not logger.handlers and not logging.getLogger().handlers:
        handler = _FallbackHandler()
        handler.setFormatter(ContextualFormatter(_DEFAULT_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        _fallback_loggers.append(logger)
    return logger


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """Log ``message`` with the traceback of ``exc`` and extra context fields."""
    with log_context(**context):
        logger.exception("%s: %s", message, exc)
