"""
Media Entity Model

An uploaded file stored in object storage. Media rows are owned by the media
subsystem; entries reference them through CmsEntryMedia and never delete them.
"""

from typing import Optional
import uuid

from sqlalchemy import BigInteger, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from cms.models.base import Base, TimestampMixin


class Media(Base, TimestampMixin):
    """
    Media model.

    Attributes:
        id: Unique identifier (UUID v4)
        file_name: Original file name
        mime_type: e.g. "image/png"
        size_in_bytes: File size
        bucket_key: Object storage key
        width / height: Pixel dimensions for images
        alt: Alternative text
    """

    __tablename__ = "media"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(255), nullable=False)
    size_in_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False)

    bucket_key: Mapped[str] = mapped_column(
        Text,
        unique=True,
        nullable=False,
    )

    width: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    height: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    alt: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Media(id={self.id}, file_name={self.file_name})>"
