"""
Database Module

Database connectivity and session management for the CMS.

Architecture Overview:
======================
    Request handler
        │  get_db()
        ▼
    AsyncSession (one per request, commit on success / rollback on error)
        │
        ▼
    CmsService  →  CmsEntryRepository  →  PostgreSQL

Usage:
======
    from cms.db import get_db, atomic

    async for db in get_db():
        service = CmsService(db, registry)
        ...
"""

from cms.db.session import (
    get_db,
    init_db,
    close_db,
    atomic,
    build_engine,
    build_session_factory,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "atomic",
    "build_engine",
    "build_session_factory",
    "AsyncSessionLocal",
    "engine",
]
