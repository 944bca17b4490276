"""Logging bootstrap for the shellmark CLI.

All module loggers live under the ``shellmark`` logger, which writes to
stderr and, when ``$SHELLMARK_LOG_FILE`` is set, to a rotating log file.
"""

from __future__ import annotations

import contextlib
import logging
import os
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import load_log_level

LOGGER_NAME = "shellmark"
LEVEL_ENV = "SHELLMARK_LOG_LEVEL"
FILE_ENV = "SHELLMARK_LOG_FILE"
STREAM_HANDLER_NAME = "shellmark-stderr"


@dataclass(frozen=True)
class LoggingRuntime:
    """Resolved runtime logging configuration."""

    level_name: str
    level: int
    file_path: str | None


_RUNTIME: LoggingRuntime | None = None


def _parse_level(raw: str | None) -> tuple[str, int]:
    normalized = str(raw or "INFO").strip().upper()
    level = getattr(logging, normalized, None)
    if not isinstance(level, int):
        level = logging.INFO
    return logging.getLevelName(level), level


def _make_stream_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.set_name(STREAM_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    return handler


def _make_file_handler(level: int, file_path: str) -> logging.Handler:
    handler = RotatingFileHandler(
        file_path,
        maxBytes=2 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def configure(level: str | None = None) -> LoggingRuntime:
    """Configure the ``shellmark`` logger hierarchy.

    Level precedence: explicit argument, ``$SHELLMARK_LOG_LEVEL``, the config
    file, then INFO. Idempotent: repeated calls return the first runtime.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level_name, level_value = _parse_level(level or os.environ.get(LEVEL_ENV) or load_log_level())
    file_path = os.environ.get(FILE_ENV, "").strip() or None

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_value)
    logger.propagate = False
    logger.handlers.clear()
    logger.addHandler(_make_stream_handler(level_value))
    if file_path is not None:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(_make_file_handler(level_value, file_path))

    logging.captureWarnings(True)

    _RUNTIME = LoggingRuntime(level_name=level_name, level=level_value, file_path=file_path)
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    """Return configured logging runtime, if configure() has run."""
    return _RUNTIME


def reset() -> None:
    """Drop handlers and forget the configured runtime."""
    global _RUNTIME
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    _RUNTIME = None


@contextlib.contextmanager
def stream_output_suspended():
    """Keep log records off stderr while the browser paints on it.

    The stderr handler is detached for the duration; file logging continues.
    """
    logger = logging.getLogger(LOGGER_NAME)
    detached = [handler for handler in logger.handlers if handler.get_name() == STREAM_HANDLER_NAME]
    placeholder = logging.NullHandler()
    previous_propagate = logger.propagate
    for handler in detached:
        logger.removeHandler(handler)
    logger.addHandler(placeholder)
    logger.propagate = False
    try:
        yield
    finally:
        logger.removeHandler(placeholder)
        logger.propagate = previous_propagate
        for handler in detached:
            logger.addHandler(handler)
