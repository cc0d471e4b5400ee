"""
Personal Logger — Database Engine Management
=============================================

What:  Async SQLAlchemy engine factory, session factory and the ORM base class.
How:   build_engine() creates an async engine over aiosqlite with per-connection
       pragmas; the storage engine owns the resulting handle for the process
       lifetime and disposes it on shutdown.
Who:   Used by the StorageEngine and by the Alembic environment.
When:  The engine is built once, during StorageEngine.initialize().

Connection Strategy:
    File store:      default async pool; every connection runs the pragmas below
    In-memory store: StaticPool so that every session shares the one connection
                     (each new connection to ":memory:" would be an empty database)

Pragmas:
    synchronous=FULL: a committed append survives power loss
    foreign_keys=ON:  kept on for parity with any future related tables
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from personal_logger.config import settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Models register with the shared metadata, which Alembic reads as
    target_metadata for autogenerate.
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────

def is_memory_url(database_url: str) -> bool:
    """True when the URL names an in-memory SQLite database."""
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def database_file(database_url: str) -> Optional[Path]:
    """
    Returns the on-disk path of a file-backed SQLite URL, or None.

    Example:
        sqlite+aiosqlite:///./data/PersonalLogger.db → data/PersonalLogger.db
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite" or is_memory_url(database_url):
        return None
    return Path(url.database)


def _set_sqlite_pragmas(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA synchronous=FULL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create the async engine for the given URL.

    What:    Builds an AsyncEngine with SQLite pragmas wired to every new connection.
    How:     Echoes SQL only at DEBUG log level; in-memory URLs get a StaticPool.

    Args:
        database_url: Async SQLAlchemy URL (e.g. sqlite+aiosqlite:///./data/PersonalLogger.db)

    Returns:
        The engine. No connection is opened until first use.
    """
    kwargs: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if is_memory_url(database_url):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}

    engine = create_async_engine(database_url, **kwargs)

    if make_url(database_url).get_backend_name() == "sqlite":
        event.listen(engine.sync_engine, "connect", _set_sqlite_pragmas)

    logger.debug("Engine created for %s", make_url(database_url).render_as_string(hide_password=True))
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to the engine.

    expire_on_commit=False keeps attribute values readable on returned
    entries after the transaction that wrote them has committed.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
