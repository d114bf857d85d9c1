"""
Noteful Backend: FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    Middleware chain:  Request ID → Access log → GZip → CORS
    Routes:            /folders, /notes (under API_PREFIX), /health
    Exception handlers:
        ValidationError, RequestValidationError → 400
        NotFoundError                           → 404
        StorageError, SQLAlchemyError           → 500
        Exception (fallback)                    → 500

Every error body has the same shape: {"error": {"message": "..."}}.

Lifecycle:
    Startup:  configure logging, log the mounted prefix
    Shutdown: dispose database engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app import __version__
from app.config import Settings, settings
from app.database import dispose_engine
from app.exceptions import NotFoundError, StorageError, ValidationError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import folders, health, notes
from app.schemas.common import error_body

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "server error"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every statement/connection at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Code before yield runs on startup, code after yield on shutdown."""
    config: Settings = app.state.settings
    setup_logging(config.log_level)
    logger.info("Noteful API %s starting up", __version__)
    logger.info("Resources mounted at %s/folders and %s/notes", config.api_prefix, config.api_prefix)
    logger.info("API docs: http://%s:%d/docs", config.backend_host, config.backend_port)

    yield

    logger.info("Noteful API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def describe_request_error(exc: RequestValidationError) -> str:
    """
    Turn FastAPI's schema errors into one message.

    Examples:
        malformed JSON           → "Request body must be valid JSON"
        {"name": 5}              → "Invalid 'name' in request: Input should be a valid string"
        /folders/abc             → "Invalid 'folder_id' in request: Input should be a valid integer, ..."
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Request body must be valid JSON"
    field = ".".join(
        str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query")
    )
    if field:
        return f"Invalid '{field}' in request: {first.get('msg', 'invalid value')}"
    return first.get("msg", "Invalid request")


def register_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 Bad Request (client can fix the input)
        RequestValidationError  → 400 Bad Request (malformed body or path id)
        NotFoundError           → 404 Not Found
        StorageError            → 500 Internal Server Error
        SQLAlchemyError         → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    500 responses say "server error" unless `debug` is on; the details are
    always logged server-side.
    """

    def server_error(exc: Exception) -> JSONResponse:
        message = str(exc) if debug else SERVER_ERROR_MESSAGE
        return JSONResponse(status_code=500, content=error_body(message))

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(status_code=400, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        message = describe_request_error(exc)
        logger.warning("[%s] Malformed request: %s", rid, message)
        return JSONResponse(status_code=400, content=error_body(message))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=error_body(exc.message))

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return server_error(exc)

    @app.exception_handler(SQLAlchemyError)
    async def handle_sqlalchemy_error(request: Request, exc: SQLAlchemyError):
        # Raised outside the services and commit_session, e.g. by a flush
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s", rid, str(exc), exc_info=True)
        return server_error(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return server_error(exc)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(config: Settings = settings) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Passing a Settings instance lets tests build an app with a different
    prefix or debug flag without touching the process-wide singleton.
    """
    app = FastAPI(
        title="Noteful API",
        description="CRUD API for folders and the notes they contain.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = config

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app, debug=config.debug)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(folders.router, prefix=config.api_prefix)
    app.include_router(notes.router, prefix=config.api_prefix)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
