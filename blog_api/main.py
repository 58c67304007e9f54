"""
Blog API — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       that owns its own database engine (app.state.engine).
Who:   uvicorn (`uvicorn blog_api.main:app`) or the `blog-api` command.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:                                            │
    │    /api/posts, /api/posts/{id}   (posts.py)         │
    │    /api/db-check                 (health.py)        │
    │    /{path}                       (frontend.py)      │
    │                                                     │
    │  Exception Handlers:                                │
    │    DatabaseError→500 │ Validation→500 │ 404 │ *→500 │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect to the database and create the posts table if missing
       (failure is fatal: the lifespan raises and the process exits non-zero)

    Shutdown:
    1. Dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog_api import __version__
from blog_api.config import Settings, settings
from blog_api.database import (
    build_engine,
    build_session_factory,
    connect_database,
    dispose_engine,
)
from blog_api.exceptions import (
    BlogApiError,
    DatabaseConnectionError,
    DatabaseError,
    NotFoundError,
)
from blog_api.middleware.logging import RequestLoggingMiddleware
from blog_api.middleware.request_id import RequestIDMiddleware, request_id_var
from blog_api.routes import frontend, health, posts

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(app_settings: Settings) -> None:
    """
    Configure logging for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] blog_api.services.post_service: message
    Output goes to stdout so container runtimes capture it.
    """
    logging.basicConfig(
        level=getattr(logging, app_settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect to the database on startup, release it on shutdown.

    Raises:
        DatabaseConnectionError: The initial connection failed. uvicorn
            reports "Application startup failed" and exits non-zero.
    """
    app_settings: Settings = app.state.settings
    engine = app.state.engine

    setup_logging(app_settings)
    logger.info("Blog API %s starting up...", __version__)

    try:
        await connect_database(engine)
    except Exception as e:
        logger.critical("Failed to connect to the database: %s", str(e))
        await dispose_engine(engine)
        raise DatabaseConnectionError(
            message=f"Failed to connect to the database: {e}",
            context={"database_url": engine.url.render_as_string(hide_password=True)},
        ) from e

    logger.info(
        "Server running at http://%s:%d",
        app_settings.backend_host,
        app_settings.backend_port,
    )

    yield

    logger.info("Blog API shutting down...")
    await dispose_engine(engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten FastAPI's error list into one line, e.g. 'body.title: Input should be a valid string'."""
    parts = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler table:
        DatabaseError (incl. RecordNotFoundError) → 500 {"error": raw message}
        RequestValidationError                    → 500 {"error": message}
        NotFoundError                             → 404 {"error": message}
        BlogApiError (base)                       → 500 {"error": message}

    Anything else is answered by RequestIDMiddleware (500 {"error": str(exc)}),
    which sits outside this layer and keeps the X-Request-ID header on the
    response.

    The raw database message is part of the response body on purpose:
    clients of this API display it as-is. A body the schema cannot coerce
    is reported with the same status and shape, since the API has no
    separate input-validation error.
    """

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        message = _format_validation_errors(exc)
        logger.warning("[%s] Unusable request to %s: %s", rid, request.url.path, message)
        return JSONResponse(status_code=500, content={"error": message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(BlogApiError)
    async def handle_app_error(request: Request, exc: BlogApiError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return JSONResponse(status_code=500, content={"error": exc.message})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use instead of the environment-derived
            singleton (tests pass one pointing at a scratch database).

    Returns:
        A FastAPI instance holding `settings`, `engine` and
        `session_factory` on `app.state`. No connection is opened until
        the lifespan runs.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Blog API",
        description="Create, list, update and delete blog posts.",
        version=__version__,
        lifespan=lifespan,
    )

    engine = build_engine(app_settings)
    app.state.settings = app_settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(posts.router)
    app.include_router(health.router)
    # Catch-all; must stay last
    app.include_router(frontend.router)

    return app


def run() -> None:
    """Entry point for the `blog-api` command."""
    uvicorn.run(
        "blog_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `blog_api.main:app` to be importable
app = create_app()
