"""
Engine, sessions and transaction scopes.

One AsyncSession per logical request, created by get_db() (commit on
success, rollback on error, always closed). CmsService receives that session
and wraps each multi-statement mutation in atomic(session):

    get_db()                       ── request transaction
      └── atomic(session)          ── SAVEPOINT (or a transaction, if none is open)
            DELETE cms_entry_media WHERE entry_id = :id
            DELETE cms_entries     WHERE id = :id

If the second DELETE fails the first is undone, and the error reaches the
caller with the request transaction still usable.

Settings used: DATABASE_URL, DATABASE_POOL_SIZE, DATABASE_MAX_OVERFLOW, DEBUG.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, AsyncIterator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from cms.config.settings import settings
from cms.core.logging import logger


# ═══════════════════════════════════════════════════════════════════════════════
# ENGINE AND SESSION FACTORIES
# ═══════════════════════════════════════════════════════════════════════════════


def build_engine(database_url: str, **kwargs: Any) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    Pool sizing from settings applies to server databases using the default
    pool. SQLite (used in tests) and an explicit poolclass skip it.

    Args:
        database_url: SQLAlchemy async URL
        **kwargs: Extra create_async_engine arguments

    Returns:
        AsyncEngine
    """
    options: dict[str, Any] = {
        "echo": settings.DEBUG,
        "pool_pre_ping": True,
    }
    if "poolclass" not in kwargs and make_url(database_url).get_backend_name() != "sqlite":
        options["pool_size"] = settings.DATABASE_POOL_SIZE
        options["max_overflow"] = settings.DATABASE_MAX_OVERFLOW
    options.update(kwargs)
    return create_async_engine(database_url, **options)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create a session factory bound to an engine.

    - expire_on_commit=False: Objects remain usable after commit
    - autoflush=False: We manually control when to flush changes
    """
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = build_engine(settings.DATABASE_URL)

AsyncSessionLocal = build_session_factory(engine)


# ═══════════════════════════════════════════════════════════════════════════════
# REQUEST SESSION: get_db()
# ═══════════════════════════════════════════════════════════════════════════════


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield the session for one logical request.

    Commits when the caller finishes cleanly, rolls back and re-raises on
    error, and always closes.

    Example:
        async for db in get_db():
            service = CmsService(db, registry)
            await service.create_entry("blog", ...)
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def atomic(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run a block of statements as one all-or-nothing unit.

    Opens a transaction when none is active, otherwise a SAVEPOINT inside the
    request transaction. On exception everything done in the block is rolled
    back and the exception propagates.

    Example:
        async with atomic(session):
            await session.execute(delete(CmsEntryMedia).where(...))
            await session.execute(delete(CmsEntry).where(...))
    """
    if session.in_transaction():
        async with session.begin_nested():
            yield session
    else:
        async with session.begin():
            yield session


# ═══════════════════════════════════════════════════════════════════════════════
# LIFECYCLE FUNCTIONS
# ═══════════════════════════════════════════════════════════════════════════════


async def init_db() -> None:
    """
    Check at startup that the store is reachable and the CMS tables exist.

    Raises:
        SQLAlchemyError: Connection failure, or cms_entries missing (run
            `alembic upgrade head`)
    """
    url = engine.url.render_as_string(hide_password=True)
    logger.info("Connecting to CMS store", url=url)
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1 FROM cms_entries LIMIT 1"))
    except SQLAlchemyError as e:
        logger.error("CMS store unavailable", url=url, error=str(e))
        raise
    logger.info("CMS store ready", url=url)


async def close_db() -> None:
    """Dispose of pooled connections at shutdown."""
    await engine.dispose()
    logger.info("CMS store connections closed")
