"""
Base Model Classes

This module provides the foundational classes for all SQLAlchemy models.
It includes the declarative base, the portable JSON column type and the
timestamp mixin.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       └── TimestampMixin   ← Automatic created_at/updated_at

Usage:
======
    from cms.models.base import Base, TimestampMixin, JSONType

    class CmsEntry(Base, TimestampMixin):
        __tablename__ = "cms_entries"
        id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
        fields: Mapped[dict[str, Any]] = mapped_column(JSONType)
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# JSONB on PostgreSQL, plain JSON everywhere else (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    """Timezone-aware current time, used for Python-side timestamps."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Maps Python dict annotations to the portable JSON type so that
    `Mapped[dict[str, Any]]` columns become JSONB on PostgreSQL.
    """

    type_annotation_map = {
        dict[str, Any]: JSONType,
    }


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    - created_at: Set when the record is first inserted
    - updated_at: Updated whenever the record is modified

    Database Behavior:
    ==================
    Both columns get a Python-side default (microsecond precision, so rows
    inserted in the same second still order correctly) and a server default
    for rows written outside the ORM. updated_at is bumped by SQLAlchemy on
    ORM UPDATE via onupdate.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utcnow,
        nullable=False,
    )
