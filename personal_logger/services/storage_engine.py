"""
Personal Logger — Storage Engine
=================================

What:  Durable local persistence of entries: open/migrate, append, list recent.
How:   Holds one async SQLAlchemy engine for the process lifetime. initialize()
       opens the store and runs the version-gated migration; append() validates
       and inserts inside a single transaction; list_recent() runs the recency
       query read-only.
Who:   Owned by the FastAPI app (app.state.storage); usable directly as a library.
When:  initialize() once at startup, then append/list_recent per user action.

Operation Flow (save-then-reload):
    ┌───────────┐    ┌──────────────┐    ┌──────────────┐    ┌─────────────┐
    │  Capture  │───▶│  Validate    │───▶│  INSERT      │───▶│ list_recent │
    │  (UI)     │    │  (boundary)  │    │  (1 txn)     │    │ (read-only) │
    └───────────┘    └──────────────┘    └──────────────┘    └─────────────┘

Error Translation:
    open / migrate failure        → InitializationError
    invalid input                 → ValidationError (no storage access)
    insert transaction failure    → WriteError (rolled back, nothing visible)
    query failure                 → ReadError
    use before initialize()       → InitializationError
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from alembic.util import CommandError
from sqlalchemy import func, select
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from personal_logger.config import settings
from personal_logger.database import build_engine, build_session_factory, database_file
from personal_logger.exceptions import InitializationError, ReadError, WriteError
from personal_logger.migrations import current_revision, upgrade_to_head
from personal_logger.models.entry import Entry
from personal_logger.schemas.entry import EntryCreate, EntryResponse
from personal_logger.services.entry_validation import build_entry
from personal_logger.services.recency import normalize_limit, recent_entries_query

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StorageEngine:
    """
    Append-only entry store over an embedded SQLite database.

    Responsibilities:
        - initialize(): open the store, create the schema on first use
        - append(): validate and insert one entry atomically
        - list_recent(): newest entries first, bounded by a limit
        - count(), schema_version(), close(): housekeeping

    There is no update and no delete.

    Args:
        database_url:  Async SQLAlchemy URL; defaults to settings.database_url
        clock:         Source of entry timestamps; defaults to the UTC wall clock
        default_limit: Recency limit used when a caller gives no usable limit
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        clock: Optional[Clock] = None,
        default_limit: Optional[int] = None,
    ):
        self.database_url = database_url or settings.database_url
        # Unusable defaults (None, < 1) fall back like any other limit
        self.default_limit = normalize_limit(default_limit, settings.recent_limit_default)
        self._clock = clock or utc_now
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._schema_version: Optional[str] = None

    @property
    def is_ready(self) -> bool:
        return self._session_factory is not None and self._schema_version is not None

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """
        Open (creating if absent) the store and bring its schema to head.

        What:    Idempotent: a repeated call reuses the open engine and the
                 migration gate finds the schema already current.
        How:     1. Create the parent directory of a file-backed store
                 2. Build the engine once
                 3. Run upgrade_to_head() inside one transaction

        Raises:
            InitializationError: The store cannot be created, opened or migrated.
        """
        if self.is_ready:
            logger.debug("Storage already initialized at revision %s", self._schema_version)
            return

        try:
            path = database_file(self.database_url)
            if path is not None:
                path.parent.mkdir(parents=True, exist_ok=True)

            if self._engine is None:
                self._engine = build_engine(self.database_url)

            async with self._engine.begin() as conn:
                revision = await conn.run_sync(upgrade_to_head)

        except (OSError, ValueError, SQLAlchemyError, CommandError) as e:
            logger.error("Failed to open entry store: %s", str(e), exc_info=True)
            await self._discard_engine()
            raise InitializationError(
                context={"error_type": type(e).__name__, "database": self._describe()},
            ) from e

        self._session_factory = build_session_factory(self._engine)
        self._schema_version = revision
        logger.info("Entry store ready (%s, schema %s)", self._describe(), revision)

    async def close(self) -> None:
        """Dispose the engine, closing every pooled connection."""
        await self._discard_engine()
        logger.info("Entry store closed")

    async def _discard_engine(self) -> None:
        engine = self._engine
        self._engine = None
        self._session_factory = None
        self._schema_version = None
        if engine is not None:
            await engine.dispose()

    def _require_session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise InitializationError(
                message="Local storage is not available",
                context={"reason": "not_initialized"},
            )
        return self._session_factory

    def _describe(self) -> str:
        try:
            path = database_file(self.database_url)
        except ArgumentError:
            return "<invalid database url>"
        return str(path) if path is not None else ":memory:"

    # ── Write Path ────────────────────────────────────────────────────────

    async def append(self, draft: EntryCreate) -> EntryResponse:
        """
        Validate and store one entry.

        Workflow:
            1. Build the entry (trim, type check, timestamp, synced=False)
            2. INSERT inside a single transaction; commit assigns the id
            3. Return the stored record

        Args:
            draft: Raw type and content from the caller

        Returns:
            EntryResponse of the stored entry, including its new id

        Raises:
            ValidationError:     Invalid type or empty content (nothing stored)
            InitializationError: initialize() has not succeeded
            WriteError:          The transaction aborted (nothing stored)
        """
        entry = build_entry(draft, self._clock())
        session_factory = self._require_session_factory()

        try:
            async with session_factory() as session:
                async with session.begin():
                    session.add(entry)
        except SQLAlchemyError as e:
            logger.error("Failed to save %s entry: %s", entry.type, str(e), exc_info=True)
            raise WriteError(
                context={"error_type": type(e).__name__, "entry_type": entry.type},
            ) from e

        logger.info("Entry %d saved (type=%s, %d chars)", entry.id, entry.type, len(entry.content))
        return EntryResponse.model_validate(entry)

    # ── Read Path ─────────────────────────────────────────────────────────

    async def list_recent(self, limit: Any = None) -> List[EntryResponse]:
        """
        The most recent entries, newest first.

        Ordering: timestamp descending, then id descending for equal timestamps.
        A missing or non-positive limit falls back to the default (10).

        Returns:
            Up to `limit` entries; an empty list for an empty store.

        Raises:
            InitializationError: initialize() has not succeeded
            ReadError:           The query failed
        """
        session_factory = self._require_session_factory()
        query = recent_entries_query(limit, self.default_limit)

        try:
            async with session_factory() as session:
                result = await session.execute(query)
                entries = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Failed to load recent entries: %s", str(e), exc_info=True)
            raise ReadError(context={"error_type": type(e).__name__}) from e

        return [EntryResponse.model_validate(entry) for entry in entries]

    async def count(self) -> int:
        """Number of stored entries."""
        session_factory = self._require_session_factory()
        try:
            async with session_factory() as session:
                result = await session.execute(select(func.count(Entry.id)))
                return result.scalar() or 0
        except SQLAlchemyError as e:
            logger.error("Failed to count entries: %s", str(e))
            raise ReadError(context={"error_type": type(e).__name__}) from e

    async def schema_version(self) -> Optional[str]:
        """Revision stored in the database; None when not initialized."""
        if self._engine is None or not self.is_ready:
            return None
        try:
            async with self._engine.connect() as conn:
                return await conn.run_sync(current_revision)
        except SQLAlchemyError as e:
            logger.error("Failed to read schema version: %s", str(e))
            raise ReadError(context={"error_type": type(e).__name__}) from e
