"""Structured logging configuration."""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from api.config import Settings, get_settings

# Third-party loggers that are chatty at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "asyncio")


def add_service_context(settings: Settings) -> Processor:
    """Build a processor stamping every event with the environment and renderer."""

    def processor(_logger: Any, _method: str, event_dict: dict) -> dict:
        event_dict.setdefault("env", settings.env)
        event_dict.setdefault("renderer", settings.renderer)
        return event_dict

    return processor


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structlog and route standard library logging to stdout."""
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        add_service_context(settings),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.is_production:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=not settings.is_test,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=not settings.is_test,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
