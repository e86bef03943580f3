"""
Structured Logging Module using structlog

This module provides structured logging for the loader with:
- Loader name correlation through context variables
- Stage identifiers for the resolution flow
- JSON formatting for log aggregation
- Output through stdlib logging, so the host application owns levels and handlers
- Truncation of long key lists so a large batch cannot flood a log line

Architectural Decision: structlog for production logging
- Context-aware logging with automatic field injection
- JSON output for log aggregation (ELK, Splunk, etc.)
"""

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone

import structlog
from structlog.types import EventDict, WrappedLogger

from redis_dataloader.core.config.settings import get_settings

# Context variable for the loader currently resolving a batch
loader_name_ctx: ContextVar[str | None] = ContextVar("loader_name", default=None)

MAX_LOGGED_KEYS = 20

PACKAGE_LOGGER_NAME = "redis_dataloader"

# Silent unless the host application configures logging
logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())

# Handler installed by setup_logging(), replaced on repeated calls
_handler: logging.Handler | None = None


def add_loader_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add the active loader name to the log event from context variable.

    STAGE-L.1: Loader name injection
    """
    loader_name = loader_name_ctx.get()
    if loader_name and "loader" not in event_dict:
        event_dict["loader"] = loader_name
    return event_dict


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add ISO timestamp to log event.

    STAGE-L.2: Timestamp injection
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return event_dict


def truncate_key_lists(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Shorten list-valued fields to MAX_LOGGED_KEYS items.

    STAGE-L.3: Key list truncation
    """
    for field, value in list(event_dict.items()):
        if isinstance(value, (list, tuple)) and len(value) > MAX_LOGGED_KEYS:
            event_dict[field] = [*value[:MAX_LOGGED_KEYS], f"... (+{len(value) - MAX_LOGGED_KEYS})"]
    return event_dict


def add_log_level_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add log level name to event dict.

    STAGE-L.4: Log level injection
    """
    if "level" in event_dict:
        event_dict["level"] = event_dict["level"].upper()
    return event_dict


# Applied when an event is logged; rendering happens in the handler's formatter
_EMIT_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    add_loader_name,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    truncate_key_lists,
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]


def setup_logging(log_level: str | None = None, log_format: str | None = None, stream=None) -> None:
    """
    Render loader logs with structlog to a stream.

    The package is silent until this is called: loader loggers write to the
    stdlib "redis_dataloader" logger, which only carries a NullHandler. Host
    applications call this from their entry point, or attach their own
    handlers to that logger instead.

    STAGE-L: Logging initialization

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')
        stream: Output stream (default: stdout)
    """
    global _handler

    settings = get_settings()

    log_level = log_level or settings.logging.LOG_LEVEL
    log_format = log_format or settings.logging.LOG_FORMAT

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            add_timestamp,
            structlog.stdlib.add_log_level,
            add_log_level_name,
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if _handler is not None:
        package_logger.removeHandler(_handler)

    _handler = logging.StreamHandler(stream or sys.stdout)
    _handler.setFormatter(formatter)
    package_logger.addHandler(_handler)
    package_logger.setLevel(getattr(logging, log_level.upper()))
    package_logger.propagate = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger writing to the stdlib logger of the same name.

    Events below the stdlib logger's effective level are dropped before any
    processing.

    Usage:
        logger = get_logger(__name__)
        logger.info("message", key="value", stage="2.0_STORE_READ")
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_EMIT_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def set_loader_name(name: str):
    """
    Set the loader name in context for the current task.

    Returns:
        Token usable with reset_loader_name()
    """
    return loader_name_ctx.set(name)


def get_loader_name() -> str | None:
    """Get current loader name from context."""
    return loader_name_ctx.get()


def reset_loader_name(token) -> None:
    """Restore the loader name context to what it was before set_loader_name()."""
    loader_name_ctx.reset(token)


def log_stage(
    logger: structlog.stdlib.BoundLogger, stage: str, message: str, level: str = "info", **kwargs
) -> None:
    """
    Log a message with stage information.

    Args:
        logger: Logger instance
        stage: Stage identifier (e.g., Stage.STORE_READ)
        message: Log message
        level: Log level (debug, info, warning, error, critical)
        **kwargs: Additional fields to log

    Usage:
        log_stage(logger, Stage.FALLBACK_FETCH, "Loading from datasource", keys=["users:1"])
    """
    log_func = getattr(logger, level.lower())
    stage_value = stage.value if hasattr(stage, "value") else stage
    log_func(message, stage=stage_value, **kwargs)
