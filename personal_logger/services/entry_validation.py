"""
Personal Logger — Entry Validation Boundary
============================================

What:  Turns a capture request into a ready-to-insert Entry, or rejects it.
How:   Checks the type against the closed EntryType set, trims content,
       stamps the timestamp from the supplied clock reading and fixes
       synced to False.
Who:   Called by StorageEngine.append() before any storage access.

Rules:
    ✅ type must be issue, task or note (case-sensitive, as sent by the buttons)
    ✅ content is trimmed; nothing else is changed (no case folding, no cap)
    ❌ empty or whitespace-only content → ValidationError(field="content")
    ❌ caller-supplied id / timestamp / synced never reach the record
"""

from datetime import datetime, timezone

from personal_logger.exceptions import ValidationError
from personal_logger.models.entry import Entry
from personal_logger.schemas.entry import EntryCreate, EntryType


def format_timestamp(moment: datetime) -> str:
    """
    ISO-8601 UTC with millisecond precision and a Z suffix.

    Example:
        datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc) → "2026-10-18T09:30:00.000Z"

    Naive datetimes are taken to be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_entry_type(value: str) -> EntryType:
    """Map the raw type string onto EntryType or raise ValidationError."""
    try:
        return EntryType(value)
    except ValueError:
        allowed = [t.value for t in EntryType]
        raise ValidationError(
            message=f"Entry type '{value}' is not supported. Allowed: {', '.join(allowed)}",
            field="type",
            context={"allowed_types": allowed},
        )


def normalize_content(value: str | None) -> str:
    """Trim content; reject it when nothing is left."""
    content = (value or "").strip()
    if not content:
        raise ValidationError(message="Please enter some text", field="content")
    return content


def build_entry(draft: EntryCreate, now: datetime) -> Entry:
    """
    Validate a capture request and build the Entry to insert.

    Args:
        draft: Raw type and content from the caller
        now:   Clock reading taken at append time

    Returns:
        A transient Entry (no id yet) with trimmed content, stamped timestamp
        and synced=False.

    Raises:
        ValidationError: Unknown type or empty content. Nothing has touched storage.
    """
    entry_type = parse_entry_type(draft.type)
    content = normalize_content(draft.content)
    return Entry(
        type=entry_type.value,
        content=content,
        timestamp=format_timestamp(now),
        synced=False,
    )
