"""
Structured logging for the CMS.

Every mutation logs one event carrying the entry's identity, so a single
grep over the logs reconstructs an entry's history:

    [info     ] CMS entry created    collection=blog entry_id=550e8400-... slug=hello-world status=draft
    [info     ] CMS entry updated    changed=['status'] collection=blog entry_id=550e8400-...
    [warning  ] CMS slug taken by concurrent insert  collection=blog slug=hello-world

Output is a colored console in development (APP_ENV=development) and one
JSON object per line everywhere else.

Usage:
======
    from cms.core.logging import logger, get_logger, log_context

    logger.info("CMS entry deleted", entry_id=entry_id, collection="blog")

    # Request-scoped fields, attached to every event until cleared
    log_context(request_id=request_id, user_id=user_id)
"""

import logging
import sys
from typing import Any, Optional
from uuid import UUID

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from cms.config.settings import settings


def _stringify_ids(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Render UUID values as plain strings in both console and JSON output."""
    for key, value in event_dict.items():
        if isinstance(value, UUID):
            event_dict[key] = str(value)
    return event_dict


def setup_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Log level name; defaults to settings.LOG_LEVEL
        json_output: Force JSON rendering on or off; defaults to JSON outside development
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    if json_output is None:
        json_output = not settings.is_development

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name),
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _stringify_ids,
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """Bind fields (request id, acting user) to every later event in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Drop fields bound by log_context(); call when the request ends."""
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger("cms")
