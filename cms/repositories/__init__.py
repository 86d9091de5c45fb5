"""
Repository Pattern Implementations

Repositories encapsulate database queries and provide a clean API for data access.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]        ← Generic get / exists / create
         │
         └── CmsEntryRepository      ← Collection queries, entry mutations, media links

    relations                        ← Relation loader (eager-load options + result shaping)

Usage Example:
==============
    from cms.repositories import CmsEntryRepository

    repo = CmsEntryRepository(db)
    entries = await repo.list_by_collection("blog", CmsEntryStatus.PUBLISHED, limit=10)
"""

from cms.repositories.base import BaseRepository
from cms.repositories.cms_entry_repository import CmsEntryRepository, build_entry_filters
from cms.repositories.relations import (
    apply_relations,
    build_relation_options,
    to_entry_result,
)

__all__ = [
    "BaseRepository",
    "CmsEntryRepository",
    "build_entry_filters",
    "apply_relations",
    "build_relation_options",
    "to_entry_result",
]
