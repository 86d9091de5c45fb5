"""
CmsEntryMedia Entity Model

Join table attaching media assets to an entry, with display order and caption.

Associations are owned by their entry: deleting the entry deletes its
associations (never the media assets themselves).
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cms.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from cms.models.cms_entry import CmsEntry
    from cms.models.media import Media


class CmsEntryMedia(Base, TimestampMixin):
    """
    CmsEntryMedia model.

    Attributes:
        id: Unique identifier (UUID v4)
        entry_id: Owning entry
        media_id: Referenced media asset
        position: Display order, ascending
        caption: Optional caption shown with the media
    """

    __tablename__ = "cms_entry_media"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    entry_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("cms_entries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    media_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("media.id"),
        nullable=False,
        index=True,
    )

    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    caption: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    entry: Mapped["CmsEntry"] = relationship(
        "CmsEntry",
        back_populates="entry_media",
        lazy="raise",
    )

    media: Mapped["Media"] = relationship("Media", lazy="raise")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<CmsEntryMedia(entry_id={self.entry_id}, media_id={self.media_id}, "
            f"position={self.position})>"
        )
