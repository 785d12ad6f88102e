"""Alembic migration environment for the document catalog database.

Migrations run through the async engine, so online mode drives
``run_sync`` from inside an event loop. The database URL comes from the
service settings (``DATABASE_URL``) unless alembic.ini supplies one.
"""

import asyncio
import logging
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from catalog_service.config.settings import get_settings
from catalog_service.infrastructure.database.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")

target_metadata = Base.metadata


def resolve_database_url() -> str:
    """alembic.ini wins when it names a URL; otherwise use the service settings."""
    url = config.get_main_option("sqlalchemy.url")
    if not url:
        url = get_settings().database_url
        config.set_main_option("sqlalchemy.url", url)
    logger.info(f"Migrating {url}")
    return url


def configure_context(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=config.get_main_option("sqlalchemy.url", "").startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL for the migrations without connecting."""
    configure_context(
        url=resolve_database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    configure_context(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Apply the migrations over an async connection."""
    resolve_database_url()
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
