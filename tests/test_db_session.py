"""Tests for session plumbing: get_db(), atomic() and lifecycle hooks."""

import uuid

import pytest
import structlog
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError

from cms.core.logging import _stringify_ids, clear_log_context, log_context
from cms.db import atomic, close_db, engine, get_db, init_db
from cms.models import Base, Media


def make_media(key: str) -> Media:
    return Media(file_name=f"{key}.png", mime_type="image/png", size_in_bytes=10, bucket_key=key)


async def media_count(session) -> int:
    return (await session.execute(select(func.count()).select_from(Media))).scalar()


class TestAtomic:
    async def test_commits_block(self, session_factory):
        async with session_factory() as session:
            async with atomic(session):
                session.add(make_media("a"))

        async with session_factory() as session:
            assert await media_count(session) == 1

    async def test_rolls_back_block_on_error(self, session_factory):
        async with session_factory() as session:
            with pytest.raises(RuntimeError):
                async with atomic(session):
                    session.add(make_media("a"))
                    await session.flush()
                    raise RuntimeError("abort")

            assert await media_count(session) == 0

    async def test_nested_inside_open_transaction(self, session_factory):
        async with session_factory() as session:
            await media_count(session)
            assert session.in_transaction()

            with pytest.raises(RuntimeError):
                async with atomic(session):
                    session.add(make_media("a"))
                    await session.flush()
                    raise RuntimeError("abort")

            async with atomic(session):
                session.add(make_media("b"))

            assert await media_count(session) == 1


class TestLifecycle:
    """Module-level engine: in-memory SQLite, single shared connection."""

    async def test_startup_request_shutdown(self):
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        await init_db()

        async for db in get_db():
            assert (await db.execute(text("SELECT 1"))).scalar() == 1

        await close_db()

    async def test_startup_fails_without_schema(self):
        with pytest.raises(SQLAlchemyError):
            await init_db()

        await close_db()


class TestLogContext:
    def test_bind_and_clear(self):
        log_context(request_id="abc-123")
        assert structlog.contextvars.get_contextvars()["request_id"] == "abc-123"

        clear_log_context()
        assert "request_id" not in structlog.contextvars.get_contextvars()

    def test_uuid_values_rendered_as_strings(self):
        entry_id = uuid.uuid4()
        event = _stringify_ids(None, "info", {"event": "CMS entry created", "entry_id": entry_id})

        assert event["entry_id"] == str(entry_id)
