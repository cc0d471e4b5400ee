"""
Personal Logger — Recency Query
================================

What:  Answers "what should the user see right now": the tail of the append log.
How:   ORDER BY timestamp DESC, id DESC LIMIT n, walked along the timestamp
       index so cost grows with the limit rather than with the table.

Limit policy:
    None, non-integers, booleans and values < 1 all mean "use the default".
    There is never a "return everything" value.
"""

from typing import Any

from sqlalchemy import Select, desc, select

from personal_logger.config import settings
from personal_logger.models.entry import Entry


def normalize_limit(limit: Any, default: int | None = None) -> int:
    """
    Resolve the effective limit.

    Examples:
        normalize_limit(5)     → 5
        normalize_limit(None)  → 10
        normalize_limit(0)     → 10
        normalize_limit(-3)    → 10
    """
    fallback = default if default is not None else settings.recent_limit_default
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        return fallback
    return limit


def recent_entries_query(limit: Any = None, default: int | None = None) -> Select:
    """Build the recency SELECT for the given (possibly unusable) limit."""
    return (
        select(Entry)
        .order_by(desc(Entry.timestamp), desc(Entry.id))
        .limit(normalize_limit(limit, default))
    )
