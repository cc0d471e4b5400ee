"""
Personal Logger — FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       owning one StorageEngine (app.state.storage).
Who:   Called by uvicorn (uvicorn personal_logger.main:app) or
       `python -m personal_logger`.
When:  Once at server startup; the returned app handles all requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │  Security    │→│ Req ID   │→│  Logging        │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │ /api/entries │ │templates │ │ GET /health     │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ Init→503 │ Write/Read→500   │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Initialize the entry store (open + migrate)
       On failure: keep serving in degraded mode; /health reports unhealthy
       and entry routes answer 503 until the next restart
    Shutdown:
    1. Close the entry store (dispose the engine)
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from personal_logger import __version__
from personal_logger.config import settings
from personal_logger.exceptions import (
    InitializationError,
    PersonalLoggerError,
    ReadError,
    ValidationError,
    WriteError,
)
from personal_logger.middleware.logging import RequestLoggingMiddleware
from personal_logger.middleware.request_id import RequestIDMiddleware, request_id_var
from personal_logger.middleware.security_headers import SecurityHeadersMiddleware
from personal_logger.routes import entries, health, templates
from personal_logger.services.storage_engine import StorageEngine
from personal_logger.static import AppShellFiles

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Level:  settings.log_level
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Third-party libraries log every statement at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("alembic").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the entry store on startup; close it on shutdown."""
    setup_logging()
    logger.info("=" * 60)
    logger.info("Personal Logger %s starting up (%s)...", __version__, settings.environment)

    storage: StorageEngine = app.state.storage
    try:
        await storage.initialize()
    except InitializationError as e:
        logger.error("Entry store unavailable: %s | Context: %s", e.message, e.context)
        logger.error("Saving is disabled until the store can be opened on restart.")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Personal Logger shutting down...")
    await storage.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # request.state outlives the ContextVar for the outermost catch-all handler
    return getattr(request.state, "request_id", "") or request_id_var.get("")


def _error_body(error: str, message: str, rid: str, details: Optional[dict] = None) -> dict:
    body = {"error": error, "message": message, "request_id": rid}
    if details is not None:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and one JSON error format.

    Handler hierarchy:
        ValidationError           → 400 Bad Request
        RequestValidationError    → 400 Bad Request (unparseable body / query)
        InitializationError       → 503 Service Unavailable
        WriteError                → 500 Internal Server Error
        ReadError                 → 500 Internal Server Error
        PersonalLoggerError       → 500 Internal Server Error
        Exception (fallback)      → 500 Internal Server Error

    Validation context goes back to the client as `details`; storage failure
    context is logged server-side only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = _request_id(request)
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, rid, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Malformed bodies and query strings get the same 400 shape as entry rules."""
        rid = _request_id(request)
        errors = exc.errors()
        first = errors[0] if errors else {}
        loc = first.get("loc") or ("body",)
        field = str(loc[-1])
        logger.warning("[%s] Request validation error on %s: %s", rid, field, first.get("msg", ""))
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "validation_error",
                f"Invalid value for '{field}'",
                rid,
                {"field": field},
            ),
        )

    @app.exception_handler(InitializationError)
    async def handle_initialization_error(request: Request, exc: InitializationError):
        rid = _request_id(request)
        logger.error("[%s] Storage unavailable: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=503,
            content=_error_body("storage_unavailable", exc.message, rid),
        )

    @app.exception_handler(WriteError)
    async def handle_write_error(request: Request, exc: WriteError):
        rid = _request_id(request)
        logger.error("[%s] Write error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("write_error", exc.message, rid),
        )

    @app.exception_handler(ReadError)
    async def handle_read_error(request: Request, exc: ReadError):
        rid = _request_id(request)
        logger.error("[%s] Read error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("read_error", exc.message, rid),
        )

    @app.exception_handler(PersonalLoggerError)
    async def handle_app_error(request: Request, exc: PersonalLoggerError):
        rid = _request_id(request)
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message, rid),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic 500; the stack trace goes to the log only."""
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again.",
                rid,
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    storage: Optional[StorageEngine] = None,
    static_root: Optional[str] = None,
    force_https: Optional[bool] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        storage:     Entry store to serve; a StorageEngine for settings.database_url
                     when omitted
        static_root: PWA shell directory; settings.static_root when omitted
        force_https: https redirect switch; on in production when omitted

    Returns:
        Fully configured FastAPI instance.
    """
    app = FastAPI(
        title="Personal Logger API",
        description=(
            "Quick capture of issues, tasks and notes, stored locally and "
            "listed newest first."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.storage = storage or StorageEngine()

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added runs first).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, force_https=force_https)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(entries.router)
    app.include_router(templates.router)
    app.include_router(health.router)

    # ── PWA Shell (mounted last so API routes take precedence) ───────────
    shell_dir = static_root or settings.static_root
    if shell_dir:
        if Path(shell_dir).is_dir():
            app.mount(
                "/",
                AppShellFiles(directory=shell_dir, max_age=settings.static_max_age),
                name="shell",
            )
        else:
            logger.warning("STATIC_ROOT %s is not a directory; PWA shell not served", shell_dir)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `personal_logger.main:app` to be importable
app = create_app()
