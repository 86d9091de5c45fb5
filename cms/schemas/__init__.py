"""
Pydantic Schemas

Request and result models.

Schema Categories:
==================
- common: Base schema, pagination
- collection: Collection definitions
- cms: Entry requests, results and relation options

Usage:
======
    from cms.schemas.cms import CmsEntryResult, CmsIncludeRelations
    from cms.schemas.common import PaginatedResponse
"""

from cms.schemas.common import (
    BaseSchema,
    PaginationParams,
    PaginationMeta,
    PaginatedResponse,
)
from cms.schemas.collection import CollectionLabels, CollectionDefinition
from cms.schemas.cms import (
    CmsIncludeRelations,
    CreateCmsEntryRequest,
    UpdateCmsEntryRequest,
    CmsUserProfile,
    CmsMediaAsset,
    CmsEntryMediaResult,
    CmsEntryResult,
)

__all__ = [
    # Common
    "BaseSchema",
    "PaginationParams",
    "PaginationMeta",
    "PaginatedResponse",
    # Collection
    "CollectionLabels",
    "CollectionDefinition",
    # CMS
    "CmsIncludeRelations",
    "CreateCmsEntryRequest",
    "UpdateCmsEntryRequest",
    "CmsUserProfile",
    "CmsMediaAsset",
    "CmsEntryMediaResult",
    "CmsEntryResult",
]
