"""
Personal Logger — Request Logging Middleware
=============================================

What:  One access log line per HTTP request on the `personal_logger.access` logger.
How:   Times the call down the chain and logs it at a level derived from the
       status. A request that escapes as an exception is logged as 500 and
       re-raised for the catch-all handler.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Line format:
    POST /api/entries 201 3.2ms [1f0c9a2b]

Entry text and query strings are never logged; /health is skipped.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from personal_logger.middleware.request_id import request_id_var

logger = logging.getLogger("personal_logger.access")

UNLOGGED_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access logging; 5xx at ERROR, 4xx at WARNING, the rest at INFO."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.log(
                level_for_status(status),
                "%s %s %d %.1fms [%s]",
                request.method,
                request.url.path,
                status,
                elapsed_ms,
                request_id_var.get(""),
            )
