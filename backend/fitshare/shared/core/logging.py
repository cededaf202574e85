"""
Logging Configuration

Structured logging for the FitShare backend using structlog.

Log Output:
===========
Development:
    2024-06-01 08:12:44 [info     ] Post created    post_id=9b1c... user_id=4e0f... type=workout

Production (JSON):
    {"timestamp": "2024-06-01T08:12:44Z", "level": "info", "event": "Post created", "post_id": "9b1c..."}

Adapters (cache, storage) log through the standard library `logging` module;
`setup_logging()` routes both through the same stdout handler and level.

Usage:
======
    from fitshare.shared.core.logging import logger, get_logger, log_context

    logger.info("Workout created", workout_id=str(workout.id), user_id=str(user_id))

    post_logger = get_logger("posts")
    post_logger.debug("Feed cache hit", key=key)

    # Bind request-wide values (done by the request logging middleware)
    log_context(request_id=request_id, path=request.url.path)
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.typing import Processor

from fitshare.config.settings import settings


def setup_logging(level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """
    Configure structlog and the standard library root logger.

    Args:
        level: Log level name, defaults to settings.LOG_LEVEL
        json_logs: Force JSON output; defaults to JSON outside development
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    if json_logs is None:
        json_logs = not settings.is_development

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        processors: list[Processor] = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name, e.g. "posts" or "media"

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """
    Bind values that every subsequent log call in this context will carry.

    Example:
        log_context(request_id="abc-123", user_id="user-456")
        logger.info("Comment added")  # includes request_id and user_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Drop all bound context variables (end of request)."""
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger("fitshare")
