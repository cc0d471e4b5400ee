"""
Alembic Migration Environment
==============================

What:  Configures Alembic for the async SQLite entry store.
How:   Three modes:
         - connection handed in via config.attributes (StorageEngine.initialize)
         - online from the CLI: async engine built from DATABASE_URL
         - offline: SQL emitted to stdout
Who:   Loaded by Alembic for `alembic upgrade` and by upgrade_to_head().
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config
from alembic import context

from personal_logger.config import settings
from personal_logger.database import Base

# Import all models so Alembic can detect them for --autogenerate
from personal_logger.models.entry import Entry  # noqa: F401

config = context.config

# Only the CLI has an .ini file; programmatic runs keep the app's logging setup
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata

# A handed-in connection needs no URL. Config values go through configparser
# interpolation, so a literal "%" (URL-encoded paths, passwords) is doubled.
if config.attributes.get("connection") is None and not config.get_main_option("sqlalchemy.url"):
    config.set_main_option("sqlalchemy.url", settings.database_url.replace("%", "%%"))


def run_migrations_offline() -> None:
    """Emit migration SQL without connecting to the database."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    """Run the migration steps on an open sync connection."""
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Connect with an async engine and apply pending migrations."""
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
        await connection.commit()

    await connectable.dispose()


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is not None:
        do_run_migrations(connection)
    else:
        asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
