"""
Personal Logger — Schema Migrations
====================================

What:  Version-gated schema creation for the entry store.
How:   Alembic revision scripts live in versions/. upgrade_to_head() reads the
       revision stored in the alembic_version table and, only when it differs
       from SCHEMA_VERSION, runs `alembic upgrade head` on the caller's
       connection (inside the caller's transaction).
Who:   Called by StorageEngine.initialize() through AsyncConnection.run_sync().
       The same scripts run from the Alembic CLI via the root alembic.ini.

Stored revision → action:
    None (new store)  → run 001, creating entries and its indexes
    "001"             → nothing (second initialize, restart)
    anything else     → alembic raises; the engine reports InitializationError
"""

import logging
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy.engine import Connection

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent

# Head revision of versions/; bump together with each new revision script
SCHEMA_VERSION = "001"


def alembic_config(connection: Optional[Connection] = None) -> Config:
    """
    Alembic Config pointing at the packaged scripts.

    When a connection is given, env.py migrates on it instead of opening its own.
    """
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    config.attributes["connection"] = connection
    return config


def current_revision(connection: Connection) -> Optional[str]:
    """The schema revision stored in the database, or None for a new store."""
    return MigrationContext.configure(connection).get_current_revision()


def upgrade_to_head(connection: Connection) -> str:
    """
    Bring the schema to SCHEMA_VERSION.

    Args:
        connection: Sync connection (from AsyncConnection.run_sync) already
                    inside a transaction; the caller commits.

    Returns:
        The revision stored after the call.
    """
    stored = current_revision(connection)
    if stored == SCHEMA_VERSION:
        logger.debug("Schema already at revision %s", stored)
        return stored

    logger.info("Migrating entry store from revision %s to %s", stored or "<empty>", SCHEMA_VERSION)
    command.upgrade(alembic_config(connection), "head")
    return current_revision(connection) or SCHEMA_VERSION
