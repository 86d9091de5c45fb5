"""
CMS entry Pydantic schemas.

Request models validate caller input before any store call. Result models are
the public shape of an entry; relation fields stay None unless the matching
CmsIncludeRelations flag was requested.
"""

from datetime import datetime
from typing import Any, Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cms.models.enums import CmsEntryStatus
from cms.schemas.common import BaseSchema


SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


# ═══════════════════════════════════════════════════════════════════════════════
# RELATION OPTIONS
# ═══════════════════════════════════════════════════════════════════════════════


class CmsIncludeRelations(BaseModel):
    """
    Which related data to load alongside an entry.

    Frozen (and therefore hashable) so it can take part in request cache keys.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    created_by_user: bool = Field(default=False, description="Creator's public profile")
    media: bool = Field(default=False, description="Media associations, ordered by position")

    @property
    def any(self) -> bool:
        return self.created_by_user or self.media


# ═══════════════════════════════════════════════════════════════════════════════
# REQUESTS
# ═══════════════════════════════════════════════════════════════════════════════


class CreateCmsEntryRequest(BaseModel):
    """Input for creating an entry."""

    model_config = ConfigDict(extra="forbid")

    slug: str = Field(min_length=1, max_length=255, pattern=SLUG_PATTERN)
    title: str = Field(min_length=1, max_length=255)
    content: Any = Field(description="Structured document payload")
    fields: dict[str, Any] = Field(description="Collection-specific fields")
    status: Optional[CmsEntryStatus] = Field(default=None, description="Defaults to draft")
    created_by: uuid.UUID

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("content")
    @classmethod
    def content_not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("content must not be null")
        return value


class UpdateCmsEntryRequest(BaseModel):
    """
    Partial update of an entry.

    Only explicitly supplied attributes are applied; use
    `model_dump(exclude_unset=True)` to get them. Supplying null is rejected.
    """

    model_config = ConfigDict(extra="forbid")

    slug: Optional[str] = Field(default=None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Any = None
    fields: Optional[dict[str, Any]] = None
    status: Optional[CmsEntryStatus] = None
    updated_by: Optional[uuid.UUID] = None

    @field_validator("slug", "title", "content", "fields", "status", "updated_by", mode="before")
    @classmethod
    def not_null(cls, value: Any) -> Any:
        # Only runs for supplied values; unset fields keep their None default
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("title must not be blank")
        return value


# ═══════════════════════════════════════════════════════════════════════════════
# RESULTS
# ═══════════════════════════════════════════════════════════════════════════════


class CmsUserProfile(BaseSchema):
    """Public profile of an entry's creator. Never carries credentials."""

    id: uuid.UUID
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[str] = None


class CmsMediaAsset(BaseSchema):
    """Public metadata of a media asset."""

    id: uuid.UUID
    file_name: str
    mime_type: str
    size_in_bytes: int
    bucket_key: str
    width: Optional[int] = None
    height: Optional[int] = None
    alt: Optional[str] = None


class CmsEntryMediaResult(BaseSchema):
    """One media association of an entry."""

    id: uuid.UUID
    entry_id: uuid.UUID
    media_id: uuid.UUID
    position: int
    caption: Optional[str] = None
    media: Optional[CmsMediaAsset] = None


class CmsEntryResult(BaseSchema):
    """Public shape of an entry, with optionally loaded relations."""

    id: uuid.UUID
    collection: str
    slug: str
    title: str
    content: Any
    fields: dict[str, Any]
    status: CmsEntryStatus
    created_by: uuid.UUID
    updated_by: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime
    published_at: Optional[datetime] = None

    created_by_user: Optional[CmsUserProfile] = None
    entry_media: Optional[list[CmsEntryMediaResult]] = None
