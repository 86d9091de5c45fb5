"""Shared fixtures: a file-backed SQLite database per test and a seeded service."""

import os

# Must be set before cms.config.settings is first imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["APP_ENV"] = "test"

from pathlib import Path
from typing import Any

import pytest

from cms.config.collections import CollectionRegistry
from cms.db.session import build_engine, build_session_factory
from cms.models import Base, Media, User
from cms.services import CmsService


@pytest.fixture
async def engine(tmp_path: Path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'cms.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def registry() -> CollectionRegistry:
    return CollectionRegistry.from_config(
        {
            "blog": {"slug": "blog", "labels": {"singular": "Blog", "plural": "Blogs"}},
            "pages": {"slug": "pages", "labels": {"singular": "Page", "plural": "Pages"}},
        }
    )


@pytest.fixture
async def author(session_factory) -> User:
    async with session_factory() as session:
        user = User(
            email="ada@example.com",
            first_name="Ada",
            last_name="Lovelace",
            avatar="https://cdn.example.com/avatars/ada.png",
            password_hash="$2b$12$not-a-real-hash",
        )
        session.add(user)
        await session.commit()
        return user


@pytest.fixture
async def media_assets(session_factory) -> list[Media]:
    async with session_factory() as session:
        assets = [
            Media(
                file_name=f"photo-{index}.png",
                mime_type="image/png",
                size_in_bytes=1024 * (index + 1),
                bucket_key=f"uploads/photo-{index}.png",
                width=800,
                height=600,
                alt=f"Photo {index}",
            )
            for index in range(3)
        ]
        session.add_all(assets)
        await session.commit()
        return assets


@pytest.fixture
def service(session, registry) -> CmsService:
    return CmsService(session, registry)


@pytest.fixture
def make_entry(service, author):
    """Factory creating a blog entry with sensible defaults."""

    async def _make(slug: str = "hello-world", collection: str = "blog", **overrides: Any):
        data: dict[str, Any] = {
            "title": slug.replace("-", " ").title(),
            "content": {"type": "doc", "content": [{"type": "paragraph", "text": slug}]},
            "fields": {"excerpt": f"About {slug}"},
            "created_by": author.id,
        }
        data.update(overrides)
        return await service.create_entry(collection, slug=slug, **data)

    return _make
