"""
CMS error taxonomy.

Every error a CmsService operation raises on purpose is a CmsException
carrying an HTTP-equivalent status and a stable machine-readable code, so a
web layer can map them without knowing the individual classes.

Exception Hierarchy:
====================
    CmsException (base)
       │
       ├── NotFoundError (404)                  ← Resource not found
       │      ├── CollectionNotFoundError
       │      ├── EntryNotFoundError
       │      └── MediaNotFoundError
       ├── ValidationError (400)                ← Invalid input data
       │      └── InvalidStatusTransitionError
       └── ConflictError (409)                  ← Conflicts with stored state
              ├── DuplicateResourceError
              │      └── DuplicateSlugError      ← Pre-check found the slug taken
              ├── UniqueConstraintViolationError ← Store rejected the write
              └── UpdateRaceLostError            ← Row vanished mid-update

Store connectivity failures (timeouts, dropped connections) are not part of
this hierarchy; they propagate as the driver/SQLAlchemy raised them.

Usage:
======
    from cms.core.exceptions import EntryNotFoundError, DuplicateSlugError

    raise EntryNotFoundError(entry_id)
    # {"error": {"code": "NOT_FOUND", "message": "Entry with id 'abc' not found"}}

    raise DuplicateSlugError("blog", "hello-world")
"""

from typing import Any, Optional


class CmsException(Exception):
    """
    Base exception for all CMS errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP-equivalent status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context

    Example:
        raise CmsException(
            message="Something went wrong",
            status_code=400,
            error_code="BAD_REQUEST",
            details={"field": "slug"}
        )
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API responses.

        Returns:
            Dictionary with error details
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(CmsException):
    """
    A collection, entry or media asset does not exist (404).

    The message is built from the resource name and id unless given.

    Example:
        raise NotFoundError("Entry", entry_id)
        # Message: "Entry with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        message: Optional[str] = None,
    ) -> None:
        if message is None:
            message = f"{resource} not found"
            if resource_id:
                message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class CollectionNotFoundError(NotFoundError):
    """Collection slug is not present in the collection registry."""

    def __init__(self, collection_slug: str) -> None:
        super().__init__(
            resource="Collection",
            message=f'Collection "{collection_slug}" not found in CMS config',
            details={"collection": collection_slug},
        )
        self.collection_slug = collection_slug


class EntryNotFoundError(NotFoundError):
    """Entry not found error."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(resource="Entry", resource_id=str(entry_id))
        self.entry_id = entry_id


class MediaNotFoundError(NotFoundError):
    """Media asset not found error."""

    def __init__(self, media_id: str) -> None:
        super().__init__(resource="Media", resource_id=str(media_id))


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION ERRORS (400)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(CmsException):
    """
    Caller input rejected (400).

    Raised when input data fails validation, before any store call is made.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "VALIDATION_ERROR",
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details,
        )


class InvalidStatusTransitionError(ValidationError):
    """Requested status change is not an allowed lifecycle transition."""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(
            message=f'Cannot change status from "{current}" to "{requested}"',
            details={"current": current, "requested": requested},
            error_code="INVALID_STATUS_TRANSITION",
        )


# ═══════════════════════════════════════════════════════════════════════════════
# CONFLICT ERRORS (409)
# ═══════════════════════════════════════════════════════════════════════════════


class ConflictError(CmsException):
    """
    The write conflicts with what is stored (409).
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "CONFLICT",
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code=error_code,
            details=details,
        )


class DuplicateResourceError(ConflictError):
    """
    A pre-check found the resource already present.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "DUPLICATE_RESOURCE",
    ) -> None:
        super().__init__(message=message, details=details, error_code=error_code)


class DuplicateSlugError(DuplicateResourceError):
    """An entry with this slug already exists in the collection."""

    def __init__(self, collection_slug: str, slug: str) -> None:
        super().__init__(
            message=f'Entry with slug "{slug}" already exists in collection "{collection_slug}"',
            details={"collection": collection_slug, "slug": slug},
            error_code="DUPLICATE_SLUG",
        )


class UniqueConstraintViolationError(ConflictError):
    """
    The store's (collection, slug) uniqueness constraint rejected a write.

    This is what a concurrent writer sees when it passed the duplicate-slug
    pre-check but lost the race to insert.
    """

    def __init__(self, collection_slug: str, slug: str) -> None:
        super().__init__(
            message=f'Slug "{slug}" is already taken in collection "{collection_slug}"',
            details={"collection": collection_slug, "slug": slug},
            error_code="UNIQUE_CONSTRAINT_VIOLATION",
        )


class UpdateRaceLostError(ConflictError):
    """The entry was deleted between the existence check and the update."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(
            message=f"Entry with id '{entry_id}' was removed before the update was applied",
            details={"entry_id": str(entry_id)},
            error_code="UPDATE_RACE_LOST",
        )
