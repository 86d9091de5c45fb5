"""
Shared result schemas.

BaseSchema is the parent of every result model built from ORM rows. The
pagination models back CmsService.list_entries_page(), which turns a
page/per_page pair into the limit/offset window list_entries() understands.

    params = PaginationParams(page=3, per_page=10)
    params.offset, params.limit      # (20, 10)

    meta = PaginationMeta.create(page=3, per_page=10, total=42)
    meta.total_pages, meta.has_next  # (5, True)
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


ItemT = TypeVar("ItemT")


class BaseSchema(BaseModel):
    """Result model base: readable from ORM attributes, populated by field name."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# PAGINATION
# ═══════════════════════════════════════════════════════════════════════════════


class PaginationParams(BaseModel):
    """
    1-indexed page request.

    per_page is capped at 100; list_entries() itself has no implicit cap, so
    callers wanting unbounded reads use it directly.
    """

    page: int = Field(default=1, ge=1, description="Page number, starting at 1")
    per_page: int = Field(default=20, ge=1, le=100, description="Entries per page")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


class PaginationMeta(BaseModel):
    """Where a page sits in the full filtered result."""

    page: int
    per_page: int
    total: int = Field(description="Entries matching the filter across all pages")
    total_pages: int

    @classmethod
    def create(cls, page: int, per_page: int, total: int) -> "PaginationMeta":
        # Ceiling division; an empty result has zero pages
        total_pages = -(-total // per_page) if per_page > 0 else 0
        return cls(page=page, per_page=per_page, total=total, total_pages=total_pages)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


class PaginatedResponse(BaseModel, Generic[ItemT]):
    """One page of results plus its pagination metadata."""

    data: list[ItemT]
    pagination: PaginationMeta
