"""
Personal Logger — Health Check Route
=====================================

What:  Health check endpoint for monitoring and platform probes.
How:   Asks the storage engine for its state, schema revision and entry count.
Who:   Called by the hosting platform's health checks.

Status levels:
    - healthy:   storage initialized and answering queries (HTTP 200)
    - unhealthy: storage failed to open or stopped answering (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from personal_logger import __version__
from personal_logger.dependencies import get_storage
from personal_logger.exceptions import PersonalLoggerError
from personal_logger.schemas.entry import HealthResponse
from personal_logger.services.storage_engine import StorageEngine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Uptime reference, set when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description=(
        "Returns the health of the service and its local entry store. "
        "Answers 503 when the store is not usable."
    ),
)
async def health_check(
    response: Response,
    storage: StorageEngine = Depends(get_storage),
) -> HealthResponse:
    database = "connected"
    overall = "healthy"
    schema_version = None
    entries = None

    if not storage.is_ready:
        database = "uninitialized"
        overall = "unhealthy"
    else:
        try:
            schema_version = await storage.schema_version()
            entries = await storage.count()
        except PersonalLoggerError as e:
            database = "disconnected"
            overall = "unhealthy"
            logger.warning("Health check: entry store unreachable: %s", e.message)

    if overall != "healthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=database,
        schema_version=schema_version,
        entries=entries,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
