"""
Configuration Module

Application configuration loaded from environment variables, plus the
collection registry built from it.

Usage:
======
    from cms.config.settings import settings
    from cms.config.collections import CollectionRegistry

    db_url = settings.DATABASE_URL
    registry = CollectionRegistry.from_settings(settings)
"""

from cms.config.settings import settings, get_settings, Settings

__all__ = [
    "settings",
    "get_settings",
    "Settings",
]
