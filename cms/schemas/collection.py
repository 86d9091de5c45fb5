"""
Collection-related Pydantic schemas.

A collection is a named category of entries sharing a slug namespace
(e.g. "blog"). Definitions are static and immutable once loaded.
"""

from pydantic import BaseModel, ConfigDict, Field


class CollectionLabels(BaseModel):
    """Display names for a collection."""

    model_config = ConfigDict(frozen=True)

    singular: str = Field(min_length=1, description="e.g. 'Blog'")
    plural: str = Field(min_length=1, description="e.g. 'Blogs'")


class CollectionDefinition(BaseModel):
    """Static descriptor of one collection."""

    model_config = ConfigDict(frozen=True)

    slug: str = Field(
        min_length=1,
        max_length=255,
        pattern=r"^[a-z0-9]+(?:[-_][a-z0-9]+)*$",
        description="Unique collection identifier stored on every entry",
    )
    labels: CollectionLabels
