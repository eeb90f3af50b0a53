"""
MVC Blog - FastAPI Application Factory
======================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn mvcblog.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────┐ ┌──────┐ ┌──────┐         │
    │  │ Req ID   │→│ Logging │→│ GZip │→│ CORS │         │
    │  └──────────┘ └─────────┘ └──────┘ └──────┘         │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌───────────────┐ ┌────────────┐  │
    │  │ /posts (HTML)│ │ /api (JSON)   │ │ /health    │  │
    │  └──────────────┘ └───────────────┘ └────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ DB→500       │   │
    │  │ JSON under /api and /health, HTML elsewhere  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from mvcblog import __version__
from mvcblog.config import settings
from mvcblog.database import dispose_engine
from mvcblog.exceptions import (
    BlogError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from mvcblog.middleware.logging import RequestLoggingMiddleware
from mvcblog.middleware.request_id import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    request_id_var,
)
from mvcblog.routes import api, health, posts
from mvcblog.templating import render

logger = logging.getLogger(__name__)

# Paths answered with the JSON error envelope instead of an HTML page
JSON_PATH_PREFIXES = ("/api", "/health")


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s"


def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s
    The stdout handler carries RequestIDLogFilter, so every line, including
    those from libraries, is tagged with the request it belongs to.
    Called once during app startup, before any other initialization.
    """
    handler = logging.StreamHandler(sys.stdout)  # Containers capture stdout
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,  # Override any existing logging config
    )

    # These log every statement / access at INFO; our middleware covers access
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: logging and banner. Shutdown: dispose the database engine."""
    setup_logging()
    logger.info("=" * 60)
    logger.info("%s %s starting up...", settings.site_name, __version__)
    logger.info("Server ready at http://%s:%d/posts", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield  # Application runs here

    logger.info("%s shutting down...", settings.site_name)
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or request_id_var.get("")


def _wants_json(request: Request) -> bool:
    return request.url.path.startswith(JSON_PATH_PREFIXES)


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
):
    """
    Build the error response for the caller's surface.

    JSON API callers get {error, message, details?, request_id};
    browsers get errors/error.html rendered with the same status code.
    """
    rid = _request_id(request)
    if _wants_json(request):
        content: Dict[str, Any] = {"error": error, "message": message, "request_id": rid}
        if details:
            content["details"] = details
        return JSONResponse(status_code=status_code, content=content)

    return render(
        request,
        "errors/error.html",
        {"status_code": status_code, "message": message, "request_id": rid},
        status_code=status_code,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes.

    Handler hierarchy:
        ValidationError     → 400 Bad Request
        NotFoundError       → 404 Not Found
        DatabaseError       → 500 Internal Server Error (generic message)
        BlogError (base)    → 500 Internal Server Error
        Exception           → 500 Internal Server Error (unexpected)

    Internal details (SQL, stack traces) are logged server-side only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s", exc.message)
        return error_response(request, 400, "validation_error", exc.message, exc.context)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(request, 404, "not_found", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "Database error: %s | Context: %s", exc.message, exc.context,
        )
        return error_response(
            request, 500, "server_error",
            "An internal error occurred. Please try again later.",
        )

    @app.exception_handler(BlogError)
    async def handle_blog_error(request: Request, exc: BlogError):
        logger.error("Application error: %s", exc.message)
        return error_response(request, 500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Runs in ServerErrorMiddleware, after RequestIDMiddleware has reset
        # the ContextVar, so the ID is taken from request.state
        logger.error(
            "[%s] Unexpected error: %s",
            _request_id(request),
            str(exc),
            exc_info=True,
        )
        return error_response(
            request, 500, "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Tests build a fresh instance per test and override get_db_session on it.
    """
    app = FastAPI(
        title=f"{settings.site_name} API",
        description=(
            "A Model-View-Controller blog: posts with categories, "
            "served as HTML pages under /posts and as JSON under /api."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(posts.router)
    app.include_router(api.router)
    app.include_router(health.router)

    @app.get("/", include_in_schema=False)
    async def index() -> RedirectResponse:
        return RedirectResponse(url="/posts", status_code=307)

    return app


# uvicorn expects `mvcblog.main:app` to be importable
app = create_app()
