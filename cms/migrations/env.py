# pylint: skip-file
# ruff: noqa
"""
Alembic environment for the CMS tables.

Online runs reuse cms.db.session.build_engine(), so migrations connect with
the same URL and driver as the application. Offline runs
(`alembic upgrade head --sql`) only render SQL.

alembic.context and alembic.op are runtime proxies, populated while a
migration command is executing.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection

from alembic import context

from cms.config.settings import settings
from cms.db.session import build_engine
from cms.models import Base, CmsEntry, CmsEntryMedia, Media, User

# Imported for their side effect of registering tables on Base.metadata
MIGRATED_MODELS = (User, Media, CmsEntry, CmsEntryMedia)

config = context.config
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def apply_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    # NullPool: a migration run holds exactly one connection
    engine = build_engine(settings.DATABASE_URL, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(apply_migrations)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
