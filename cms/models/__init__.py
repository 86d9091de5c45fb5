"""
CMS SQLAlchemy Models

Model Hierarchy:
================
    CmsEntry
       ├── created_by_user (User)          - public profile only
       └── entry_media (CmsEntryMedia[])   - ordered by position
              └── media (Media)

Models Overview:
================
- Base: Base class, JSON column type and timestamp mixin
- CmsEntry: One content record in a collection
- CmsEntryMedia: Ordered media attachment of an entry
- User: Registered user (read-only here)
- Media: Uploaded media asset (read-only here)
"""

from cms.models.base import Base, TimestampMixin, JSONType
from cms.models.enums import CmsEntryStatus, STATUS_ALL
from cms.models.user import User
from cms.models.media import Media
from cms.models.cms_entry import CmsEntry
from cms.models.cms_entry_media import CmsEntryMedia

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    "JSONType",
    # Enums
    "CmsEntryStatus",
    "STATUS_ALL",
    # Models
    "User",
    "Media",
    "CmsEntry",
    "CmsEntryMedia",
]
