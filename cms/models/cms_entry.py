"""
CmsEntry Entity Model

One content record belonging to a collection. All collections share this
table; `collection` is a denormalized tag holding the collection slug.

SAMPLE CMS_ENTRY RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ collection       │ "blog"                                                     │
│ slug             │ "hello-world"                                              │
│ title            │ "Hello"                                                    │
│ content          │ {"type": "doc", "content": [...]}                          │
│ fields           │ {"excerpt": "A brief summary", "tags": ["intro"]}          │
│ status           │ published                                                  │
│ published_at     │ 2024-01-15T10:30:00Z                                      │
└──────────────────────────────────────────────────────────────────────────────┘

Invariants:
===========
- (collection, slug) is unique (uq_cms_entries_collection_slug)
- status is always draft | published | archived, never the "all" wildcard
- content and fields are never NULL

Relationships use lazy="raise": related rows are only ever loaded through
the relation loader (cms.repositories.relations), never implicitly.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import (
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cms.models.base import Base, JSONType, TimestampMixin
from cms.models.enums import CmsEntryStatus


if TYPE_CHECKING:
    from cms.models.user import User
    from cms.models.cms_entry_media import CmsEntryMedia


class CmsEntry(Base, TimestampMixin):
    """
    CmsEntry model.

    Attributes:
        id: Unique identifier (UUID v4)
        collection: Slug of the owning collection
        slug: URL-safe identifier, unique within the collection
        title: Entry title
        content: Structured document payload (owned by the rich-text editor)
        fields: Collection-specific key/value payload
        status: draft | published | archived
        created_by / updated_by: User references
        published_at: Set the first time the entry is published

    Relationships:
        created_by_user: The creating user (public profile only)
        entry_media: Media associations ordered by position
    """

    __tablename__ = "cms_entries"

    __table_args__ = (
        UniqueConstraint("collection", "slug", name="uq_cms_entries_collection_slug"),
        Index("ix_cms_entries_collection_status_created", "collection", "status", "created_at"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # IDENTITY WITHIN A COLLECTION
    # ═══════════════════════════════════════════════════════════════════════════

    collection: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    content: Mapped[Any] = mapped_column(JSONType, nullable=False)

    fields: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False)

    # ═══════════════════════════════════════════════════════════════════════════
    # LIFECYCLE
    # ═══════════════════════════════════════════════════════════════════════════

    status: Mapped[CmsEntryStatus] = mapped_column(
        SQLEnum(
            CmsEntryStatus,
            name="cmsentrystatus",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=CmsEntryStatus.DRAFT,
    )

    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # AUTHORSHIP
    # ═══════════════════════════════════════════════════════════════════════════

    created_by: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    updated_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    created_by_user: Mapped["User"] = relationship(
        "User",
        foreign_keys=[created_by],
        lazy="raise",
    )

    entry_media: Mapped[list["CmsEntryMedia"]] = relationship(
        "CmsEntryMedia",
        back_populates="entry",
        order_by="[CmsEntryMedia.position, CmsEntryMedia.id]",
        lazy="raise",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<CmsEntry(id={self.id}, collection={self.collection}, "
            f"slug={self.slug}, status={self.status})>"
        )
