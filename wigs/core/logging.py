"""Structured logging: structlog processors rendered through stdlib handlers."""

from __future__ import annotations

import logging
import logging.config
import os

import structlog

# Third-party loggers that are too chatty at INFO.
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "asyncpg", "aiosqlite")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Configure structlog and stdlib logging.

    Explicit arguments win; otherwise the environment is consulted:
        WIGS_LOG_LEVEL  — business log level (default: INFO)
        WIGS_LOG_FORMAT — console | json (default: console)
    """
    level = (level or os.environ.get("WIGS_LOG_LEVEL", "INFO")).upper()
    log_format = (log_format or os.environ.get("WIGS_LOG_FORMAT", "console")).lower()
    shared = _shared_processors()

    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    loggers: dict[str, dict[str, str]] = {name: {"level": "WARNING"} for name in _QUIET_LOGGERS}
    loggers["wigs"] = {"level": level}
    loggers["uvicorn.error"] = {"level": "INFO"}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        _renderer(log_format),
                    ],
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "structlog",
                },
            },
            "root": {"handlers": ["default"], "level": level},
            "loggers": loggers,
        }
    )
