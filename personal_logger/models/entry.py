"""
Personal Logger — Entry SQLAlchemy Model
=========================================

What:  ORM model representing the `entries` table.
How:   Inherits from the shared DeclarativeBase; mirrors migration 001, which is
       the authority for the on-disk schema.
Who:   Written by StorageEngine.append(); read by the recency query.

Table Design:
    - id:        INTEGER PRIMARY KEY AUTOINCREMENT, so ids are never reused and
                 strictly increase in insert order
    - type:      issue | task | note, enforced at the boundary and by a CHECK
    - content:   trimmed, non-empty text with no length cap
    - timestamp: ISO-8601 UTC string (2026-10-18T09:30:00.123Z); fixed-width,
                 so string order equals time order
    - synced:    always false; reserved for a sync feature that does not exist

    Index on timestamp:
        Serves ORDER BY timestamp DESC, id DESC LIMIT n. SQLite stores the
        rowid (our id) as the last key of every index, so the tie break is
        covered as well.
    Index on type:
        Provisioned for per-type filtering; no current query uses it.
"""

from sqlalchemy import Boolean, CheckConstraint, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from personal_logger.database import Base

# Stored values of EntryType; migration 001 creates the same CHECK list
ENTRY_TYPES = ("issue", "task", "note")

_TYPE_CHECK = "type IN (" + ", ".join(f"'{t}'" for t in ENTRY_TYPES) + ")"


class Entry(Base):
    """
    A single logged record.

    Lifecycle:
        1. Built by the validation boundary (trimmed content, stamped timestamp)
        2. Inserted once by StorageEngine.append(), which assigns id
        3. Never updated, never deleted
    """

    __tablename__ = "entries"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    type: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    timestamp: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
    )

    synced: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("0"),
    )

    __table_args__ = (
        CheckConstraint(_TYPE_CHECK, name="ck_entries_type"),
        Index("idx_entries_timestamp", "timestamp"),
        Index("idx_entries_type", "type"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return (
            f"<Entry(id={self.id}, type='{self.type}', "
            f"timestamp='{self.timestamp}')>"
        )
