"""
Services Module

Business logic layer between callers and repositories.
"""

from cms.services.cms_service import CmsService
from cms.services.request_cache import RequestCache, request_cached

__all__ = [
    "CmsService",
    "RequestCache",
    "request_cached",
]
