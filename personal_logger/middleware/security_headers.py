"""
Personal Logger — PWA Security Headers Middleware
==================================================

What:  Browser hardening headers on every response, plus the service-worker
       and manifest headers the PWA shell needs.
How:   In production, plain-http requests (per X-Forwarded-Proto from the
       hosting proxy) are redirected to https before anything else runs.
Who:   Applied to every request via Starlette middleware.

Headers:
    all responses:    X-Content-Type-Options, X-Frame-Options,
                      X-XSS-Protection, Referrer-Policy
    /sw.js:           Cache-Control no-cache/no-store, Service-Worker-Allowed: /
    /manifest.json:   Content-Type: application/manifest+json
"""

import logging
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from personal_logger.config import settings

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

SERVICE_WORKER_PATH = "/sw.js"
MANIFEST_PATH = "/manifest.json"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds PWA security headers and enforces https in production.

    Args:
        force_https: Redirect requests not forwarded as https. Defaults to
                     settings.is_production.
    """

    def __init__(self, app, force_https: Optional[bool] = None, **kwargs):
        super().__init__(app, **kwargs)
        self.force_https = settings.is_production if force_https is None else force_https

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if self.force_https and request.headers.get("x-forwarded-proto") != "https":
            host = request.headers.get("host", request.url.netloc)
            target = f"https://{host}{request.url.path}"
            if request.url.query:
                target = f"{target}?{request.url.query}"
            logger.debug("Redirecting plain http request to %s", target)
            return RedirectResponse(target, status_code=302)

        response = await call_next(request)

        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value

        path = request.url.path
        if path == SERVICE_WORKER_PATH:
            response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
            response.headers["Service-Worker-Allowed"] = "/"
        elif path == MANIFEST_PATH:
            response.headers["Content-Type"] = "application/manifest+json"

        return response
