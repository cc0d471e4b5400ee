"""
Personal Logger — Pydantic Request/Response Schemas
====================================================

What:  Pydantic models defining the entry contract between the UI and the store.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the OpenAPI documentation. The storage engine returns
       EntryResponse objects directly, so library callers see the same shape.

Request bodies take plain strings. Entry rules are checked in
services/entry_validation.py and surface as ValidationError (400).
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class EntryType(str, Enum):
    """The three capture buttons of the UI."""

    ISSUE = "issue"
    TASK = "task"
    NOTE = "note"


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what the client sends
# ══════════════════════════════════════════════════════════════════════════


class EntryCreate(BaseModel):
    """
    What:  A capture request: which button was tapped and the text entered.
    Who:   Sent by POST /api/entries; passed to StorageEngine.append().

    Any other keys (id, timestamp, synced) are dropped on parse; the store
    assigns those itself.
    """
    type: str = Field(description="Entry category: issue, task or note")
    content: str = Field(default="", description="Entry text; trimmed before storage")

    model_config = {"extra": "ignore"}


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class EntryResponse(BaseModel):
    """
    What:  Full representation of a stored entry.
    Who:   Returned by append, list_recent and the entry routes.
    """
    id: int = Field(description="Surrogate key assigned by the store")
    type: EntryType = Field(description="Entry category")
    content: str = Field(description="Trimmed entry text")
    timestamp: str = Field(description="Creation time (UTC ISO 8601)")
    synced: bool = Field(default=False, description="Reserved; always false")

    model_config = {"from_attributes": True}


class EntryListResponse(BaseModel):
    """
    What:  The recency list shown under the capture buttons.
    Who:   Returned by GET /api/entries.
    """
    entries: List[EntryResponse] = Field(description="Most recent entries, newest first")
    count: int = Field(description="Number of entries in this response")


class TemplateListResponse(BaseModel):
    """Quick-entry phrases keyed by entry type."""
    templates: Dict[EntryType, List[str]] = Field(description="Template phrases per type")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Please enter some text",
            "details": {"field": "content"},
            "request_id": "1f0c9a2b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and storage status.
    Who:   Returned by GET /health.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Storage state: connected, disconnected, uninitialized")
    schema_version: Optional[str] = Field(default=None, description="Stored schema revision")
    entries: Optional[int] = Field(default=None, description="Number of stored entries")
    uptime_seconds: float = Field(description="Seconds since service started")
