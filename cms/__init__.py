"""
CMS Entry Store

Content entry data-access and mutation layer.

Package Structure:
==================
    cms/
    ├── config/         ← Settings and the collection registry
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer and relation loader
    ├── schemas/        ← Pydantic request/result models
    ├── services/       ← Public entry operations
    └── migrations/     ← Alembic environment and revisions

Usage:
======
    from cms.config import settings
    from cms.config.collections import CollectionRegistry
    from cms.db import AsyncSessionLocal
    from cms.services import CmsService

    registry = CollectionRegistry.from_settings(settings)

    async with AsyncSessionLocal() as session:
        service = CmsService(session, registry)
        posts = await service.list_entries("blog", limit=10)
"""
