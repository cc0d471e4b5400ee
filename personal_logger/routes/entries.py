"""
Personal Logger — Entry Route Handlers
=======================================

What:  POST /api/entries (save) and GET /api/entries (recent list).
How:   Parses the request, delegates to the StorageEngine, returns JSON.
Who:   Called by the capture modal (save) and the recent list (refresh).

The UI saves, then reloads the list; it never inserts optimistically, so a
failed save (WriteError) leaves the visible list untouched.
"""

import logging

from fastapi import APIRouter, Depends, Query, Response

from personal_logger.dependencies import get_storage
from personal_logger.schemas.entry import (
    EntryCreate,
    EntryListResponse,
    EntryResponse,
    ErrorResponse,
)
from personal_logger.services.storage_engine import StorageEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Entries"])


@router.post(
    "/entries",
    status_code=201,
    response_model=EntryResponse,
    responses={
        201: {"description": "Entry saved", "model": EntryResponse},
        400: {"description": "Empty content or unknown type", "model": ErrorResponse},
        500: {"description": "Entry could not be written", "model": ErrorResponse},
        503: {"description": "Local storage unavailable", "model": ErrorResponse},
    },
    summary="Save a new entry",
    description=(
        "Stores an issue, task or note. Content is trimmed; id, timestamp and "
        "synced are assigned by the store and ignored if sent."
    ),
)
async def create_entry(
    draft: EntryCreate,
    storage: StorageEngine = Depends(get_storage),
) -> EntryResponse:
    return await storage.append(draft)


@router.get(
    "/entries",
    response_model=EntryListResponse,
    responses={
        200: {"description": "Most recent entries, newest first", "model": EntryListResponse},
        500: {"description": "Entries could not be read", "model": ErrorResponse},
        503: {"description": "Local storage unavailable", "model": ErrorResponse},
    },
    summary="List the most recent entries",
    description=(
        "Returns up to `limit` entries ordered newest first (ties: most recently "
        "saved first). A missing or non-positive limit uses the default of 10."
    ),
)
async def list_entries(
    response: Response,
    limit: int | None = Query(
        default=None,
        description="Maximum entries to return; values below 1 use the default",
    ),
    storage: StorageEngine = Depends(get_storage),
) -> EntryListResponse:
    """
    Recent entries for the list under the capture buttons.

    The list changes after every save, so the response is never cached.
    """
    entries = await storage.list_recent(limit)
    response.headers["Cache-Control"] = "no-store"
    return EntryListResponse(entries=entries, count=len(entries))
