"""
structlog setup for Stockbook.

Events are snake_case names with keyword fields. Development gets the
colored console renderer; staging and production get one JSON object per
line. Fields bound with ``structlog.contextvars`` (the HTTP layer binds
``request_id``) are merged into every event.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from stockbook.config.settings import Settings, get_settings

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("aiosqlite", "uvicorn.access", "httpx")


def drop_none_fields(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Remove fields whose value is None, e.g. an absent traceback."""
    return {k: v for k, v in event_dict.items() if v is not None}


def app_context(settings: Settings) -> Processor:
    """Processor stamping app name, version and environment on each event."""
    context: dict[str, Any] = {
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }

    def add_app_context(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_app_context


def build_processors(settings: Settings) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        drop_none_fields,
        app_context(settings),
    ]
    if settings.environment == "development":
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return processors


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib root logger it writes through."""
    settings = settings or get_settings()

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
