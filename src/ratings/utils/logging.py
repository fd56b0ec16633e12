"""Logging for the Ratings domain.

Stdlib handlers do the output and structlog formats on top of them.
Environment variables:

    PROTEAN_ENV / ENVIRONMENT   picks the level and the renderer
    LOG_LEVEL                   overrides the level
    LOG_FORMAT                  ``json`` or ``console``; overrides the renderer
    LOG_DIR                     directory for ``ratings.log`` and ``ratings_error.log``

Under ``test`` only the console handler is installed.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVELS = {"production": "INFO", "staging": "INFO", "development": "DEBUG", "test": "WARNING"}
_JSON_ENVIRONMENTS = ("production", "staging")
_QUIET_LOGGERS = ("protean", "urllib3", "asyncio", "sqlalchemy.engine")
_MAX_BYTES = 10 * 1024 * 1024


def environment() -> str:
    return (os.getenv("PROTEAN_ENV") or os.getenv("ENVIRONMENT") or "development").lower()


def log_level() -> str:
    return os.getenv("LOG_LEVEL", _LEVELS.get(environment(), "INFO")).upper()


def renders_json() -> bool:
    log_format = os.getenv("LOG_FORMAT")
    if log_format:
        return log_format.lower() == "json"
    return environment() in _JSON_ENVIRONMENTS


def _rotating(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=_MAX_BYTES, backupCount=5, encoding="utf-8")
    handler.setLevel(level)
    return handler


def _handlers(level: str) -> list[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    if environment() == "test":
        return [console]

    log_dir = Path(os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return [
        console,
        _rotating(log_dir / "ratings.log", level),
        _rotating(log_dir / "ratings_error.log", logging.ERROR),
    ]


def _renderer():
    if renders_json():
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
    )


def configure_logging() -> None:
    level = log_level()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = _handlers(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            _renderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind key/values (request method, path, actor) to every later log line of this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
