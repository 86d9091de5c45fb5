"""
Core Module

Provides core functionality shared across the package:
- Structured logging
- Custom exceptions

Usage:
======
    from cms.core.logging import logger, get_logger
    from cms.core.exceptions import CmsException, EntryNotFoundError

    logger.info("Starting operation", entry_id=entry_id)
"""

from cms.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from cms.core.exceptions import (
    CmsException,
    NotFoundError,
    CollectionNotFoundError,
    EntryNotFoundError,
    MediaNotFoundError,
    ValidationError,
    InvalidStatusTransitionError,
    ConflictError,
    DuplicateResourceError,
    DuplicateSlugError,
    UniqueConstraintViolationError,
    UpdateRaceLostError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "CmsException",
    "NotFoundError",
    "CollectionNotFoundError",
    "EntryNotFoundError",
    "MediaNotFoundError",
    "ValidationError",
    "InvalidStatusTransitionError",
    "ConflictError",
    "DuplicateResourceError",
    "DuplicateSlugError",
    "UniqueConstraintViolationError",
    "UpdateRaceLostError",
]
