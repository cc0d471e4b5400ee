"""
Personal Logger — PWA Shell Files
==================================

What:  Serves the front-end shell (index.html, app.js, sw.js, manifest.json).
How:   Starlette StaticFiles with an index.html fallback for any path that is
       not a file, so client-side routes load the app. Paths under /api never
       fall back: an unknown API path stays a 404.
When:  Mounted only when STATIC_ROOT is configured.
"""

from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

INDEX_FILE = "index.html"
API_PREFIX = "api"


def is_api_path(path: str) -> bool:
    """`path` is relative to the mount ("api/entries", not "/api/entries")."""
    return path == API_PREFIX or path.startswith(f"{API_PREFIX}/")


class AppShellFiles(StaticFiles):
    """
    StaticFiles with an index.html fallback and a fixed asset cache lifetime.

    Args:
        directory: Folder holding the built PWA
        max_age:   Seconds for Cache-Control on served files (0 in development)
    """

    def __init__(self, *, directory: str, max_age: int = 0, **kwargs):
        super().__init__(directory=directory, html=True, **kwargs)
        self.max_age = max_age

    async def get_response(self, path: str, scope: Scope) -> Response:
        if is_api_path(path):
            return await super().get_response(path, scope)

        try:
            response = await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
            response = await super().get_response(INDEX_FILE, scope)

        if response.status_code == 404:
            response = await super().get_response(INDEX_FILE, scope)

        if "cache-control" not in response.headers:
            response.headers["Cache-Control"] = f"public, max-age={self.max_age}"
        return response
