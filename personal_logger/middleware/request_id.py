"""
Personal Logger — Request ID Middleware
========================================

What:  Tags every request with a short ID, returned in X-Request-ID and in
       error bodies, and prefixed to server log lines.
How:   A client-sent X-Request-ID is reused when it is a plain token (letters,
       digits, '-', '_', '.', at most 64 chars); anything else is replaced by
       the first 8 hex digits of a UUID4. The ID lives in a ContextVar for the
       duration of the request and is reset afterwards.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(sent: str | None) -> str:
    """The client's ID when it is a safe token, otherwise a fresh one."""
    if sent and _CLIENT_ID.fullmatch(sent):
        return sent
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
