"""Create entries table

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates the `entries` collection with its timestamp and type indexes.
How:   SQLite INTEGER PRIMARY KEY AUTOINCREMENT for the surrogate key; a CHECK
       constraint restricts type to issue/task/note.

Rollback: downgrade() drops the table entirely (destructive: all entries are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the entries table and both lookup indexes."""
    op.create_table(
        "entries",

        # Surrogate key, assigned in insert order and never reused
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),

        # Entry category
        sa.Column("type", sa.String(16), nullable=False),

        # Trimmed entry text
        sa.Column("content", sa.Text(), nullable=False),

        # ISO-8601 UTC creation time
        sa.Column("timestamp", sa.String(32), nullable=False),

        # Reserved for sync; always false
        sa.Column(
            "synced",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("0"),
        ),

        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "type IN ('issue', 'task', 'note')",
            name="ck_entries_type",
        ),
        sqlite_autoincrement=True,
    )

    # Recency query: ORDER BY timestamp DESC, id DESC
    op.create_index("idx_entries_timestamp", "entries", ["timestamp"])

    # Future per-type filtering
    op.create_index("idx_entries_type", "entries", ["type"])


def downgrade() -> None:
    """
    Drop the entries table entirely.

    WARNING: destructive, every stored entry is permanently lost.
    """
    op.drop_index("idx_entries_type", table_name="entries")
    op.drop_index("idx_entries_timestamp", table_name="entries")
    op.drop_table("entries")
