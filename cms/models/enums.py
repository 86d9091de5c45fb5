"""
Enums used across the package.
"""

from enum import Enum


class CmsEntryStatus(str, Enum):
    """Publication lifecycle of an entry."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


# Query-only wildcard meaning "no status filter". Never stored.
STATUS_ALL = "all"


# Allowed status changes; staying in the same status is always allowed.
# Nothing leads back to DRAFT: unpublishing is archiving.
STATUS_TRANSITIONS: dict[CmsEntryStatus, frozenset[CmsEntryStatus]] = {
    CmsEntryStatus.DRAFT: frozenset({CmsEntryStatus.PUBLISHED}),
    CmsEntryStatus.PUBLISHED: frozenset({CmsEntryStatus.ARCHIVED}),
    CmsEntryStatus.ARCHIVED: frozenset({CmsEntryStatus.PUBLISHED}),
}


def can_transition(current: CmsEntryStatus, requested: CmsEntryStatus) -> bool:
    """Check whether an entry may move from `current` to `requested`."""
    return current == requested or requested in STATUS_TRANSITIONS[current]
