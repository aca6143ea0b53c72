"""
RecipeBook Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn recipebook.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌──────────┐ ┌─────────────────┐ ┌────────────────┐ │
    │  │ Req ID   │→│  Logging        │→│  CORS (*)      │ │
    │  └──────────┘ └─────────────────┘ └────────────────┘ │
    │                                                      │
    │  Routes:                                             │
    │  users · favorites · recipes (bearer) · health       │
    │  testing (/delete_users, non-production flag only)   │
    │                                                      │
    │  Exception Handlers:                                 │
    │  RecipeBookError → its own status + body key         │
    │  RequestValidationError → 400 · Exception → 500      │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → configuration check → log startup
    Shutdown: release the Firebase App → drop cached collaborators
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recipebook import __version__
from recipebook.config import settings
from recipebook.dependencies import reset_collaborators
from recipebook.exceptions import RecipeBookError
from recipebook.firebase import close_firebase
from recipebook.middleware.logging import RequestLoggingMiddleware
from recipebook.middleware.request_id import RequestIDMiddleware, request_id_var
from recipebook.routes import favorites, health, recipes, testing, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    When:    Called once during app startup, before any other initialization.
    Format:  %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries that log every call at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("grpc").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and check settings.
    Shutdown: release the Firebase App.

    Firebase itself is initialized lazily by the first request that needs a
    collaborator, so the process starts (and /health answers) even when
    credentials are missing.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("RecipeBook Backend starting up (env=%s)...", settings.app_env)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    if settings.test_endpoints_enabled:
        logger.warning("Test endpoints are ENABLED: POST /delete_users deletes every account")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("RecipeBook Backend shutting down...")
    close_firebase()
    reset_collaborators()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers.

    Handler mapping:
        RecipeBookError        → exc.status_code, {exc.body_key: exc.message}
        RequestValidationError → 400 {"message": ...} (malformed JSON or wrong types)
        Exception (fallback)   → 500 {"message": ...}

    Every error body also carries the request id. Context dicts are logged,
    never returned.
    """

    @app.exception_handler(RecipeBookError)
    async def handle_recipebook_error(request: Request, exc: RecipeBookError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)

        content = {exc.body_key: exc.message, "request_id": rid}
        if exc.details is not None:
            content["details"] = exc.details
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request body")
        if location:
            message = f"{location}: {message}"
        logger.warning("[%s] Request validation failed: %s", rid, message)
        return JSONResponse(
            status_code=400,
            content={"message": message, "request_id": rid},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace is logged server-side only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "message": "An unexpected error occurred. Please try again.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    The test-only router is included only when settings allow it at the time
    of the call; tests flip the flag and build a fresh app.
    """
    app = FastAPI(
        title="RecipeBook API",
        description=(
            "Accounts, sessions, favorite recipes and user-created recipes "
            "on top of Firebase Authentication and Cloud Firestore."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(users.router)
    app.include_router(favorites.router)
    app.include_router(recipes.router)
    app.include_router(health.router)
    if settings.test_endpoints_enabled:
        app.include_router(testing.router)

    return app


# uvicorn expects `recipebook.main:app` to be importable
app = create_app()
