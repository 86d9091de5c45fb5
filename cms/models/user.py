"""
User Entity Model

Represents a registered application user. Users are owned by the
authentication subsystem; the CMS only reads their public profile when
loading an entry's creator.

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ email            │ "user@example.com"                                        │
│ first_name       │ "Ada"                                                      │
│ last_name        │ "Lovelace"                                                 │
│ avatar           │ "https://cdn.example.com/avatars/ada.png"                 │
│ password_hash    │ "$2b$12$..."   (never loaded by the CMS)                  │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import Optional
import uuid

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from cms.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """
    User model.

    Attributes:
        id: Unique identifier (UUID v4)
        email: User's email address (unique, indexed)
        first_name / last_name: Display name parts
        avatar: Avatar URL
        password_hash: Credential hash, never exposed through CMS results
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        unique=True,
        nullable=True,
        index=True,
    )

    first_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    avatar: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    password_hash: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, email={self.email})>"
