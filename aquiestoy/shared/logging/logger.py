"""Loguru setup for the API process.

Every record carries ``extra[correlation_id]``; the request middleware sets it
from ``X-Request-ID`` so a single request can be followed across log lines.
Records from the standard ``logging`` module (werkzeug, SQLAlchemy) are
forwarded into loguru so one format and one redaction filter apply to all of
them.
"""

from __future__ import annotations

import inspect
import logging
import os
import sys
from contextvars import ContextVar
from typing import Any

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_NO_CORRELATION = "-"
_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default=_NO_CORRELATION)

# Records emitted before setup_logging() still need the key for _FMT.
_logger.configure(extra={"correlation_id": _NO_CORRELATION})

_QUIET_LIBRARIES = {
    "werkzeug": logging.INFO,
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
}


class _StdlibBridge(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk out of the logging module so loguru reports the real caller.
        frame, depth = inspect.currentframe(), 0
        while frame is not None and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        _logger.bind(correlation_id=_CORRELATION_ID.get()).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


class ContextualLogger:
    """Loguru proxy that binds the current correlation id on every call."""

    def __getattr__(self, name: str) -> Any:  # pragma: no cover
        return getattr(_logger.bind(correlation_id=_CORRELATION_ID.get()), name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or _NO_CORRELATION)


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set(_NO_CORRELATION)


def _resolve_level(level: str | None, debug_mode: bool) -> str:
    if debug_mode:
        return "DEBUG"
    return (level or os.getenv("LOG_LEVEL") or "INFO").upper()


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    """Route loguru and stdlib logging to stderr and, when LOG_FILE is set, to a file.

    ``debug_mode`` forces DEBUG and turns on loguru's variable diagnostics for
    the console sink only.
    """
    resolved = _resolve_level(level, debug_mode)
    common: dict[str, Any] = {
        "level": resolved,
        "format": _FMT,
        "filter": sanitize_record,
        "backtrace": False,
    }

    _logger.remove()
    _logger.add(sys.stderr, colorize=True, diagnose=debug_mode, **common)

    log_file = os.getenv("LOG_FILE")
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        _logger.add(
            log_file,
            colorize=False,
            diagnose=False,
            enqueue=True,
            encoding="utf-8",
            **common,
        )

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    for name, library_level in _QUIET_LIBRARIES.items():
        logging.getLogger(name).setLevel(library_level)


logger = ContextualLogger()

__all__ = [
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
