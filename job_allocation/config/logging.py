"""
Logging configuration for the application.

Every module logs through ``get_logger(__name__)``. Request-scoped values such
as ``request_id`` and the acting user are bound with ``bind_request_context``
and merged into each event by structlog's contextvars processor.
"""

import logging
import sys
from typing import Any, List, Optional

import structlog

from job_allocation.config.settings import settings

# Libraries that are chatty at INFO
QUIET_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "aiosqlite",
    "asyncio",
    "httpx",
    "httpcore",
)


def _add_service(logger: Any, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", settings.APP_NAME)
    return event_dict


def _build_processors() -> List[Any]:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.ENVIRONMENT in ("production", "staging"):
        processors.append(_add_service)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=settings.ENVIRONMENT != "test")
        )
    return processors


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structlog on top of the stdlib logging module."""
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper())

    structlog.configure(
        processors=_build_processors(),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_request_context(**values: Any) -> None:
    """Bind values to every log event emitted by the current request."""
    structlog.contextvars.bind_contextvars(
        **{key: value for key, value in values.items() if value is not None}
    )


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str = None) -> structlog.BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)
