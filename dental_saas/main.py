"""
Dental SaaS Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn dental_saas.main:app) and by the test suite,
       which injects an in-memory store.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐ ┌─────────────┐  │
    │  │  Req ID  │→│ Logging  │→│   GZip   │→│    CORS     │  │
    │  └──────────┘ └──────────┘ └──────────┘ └─────────────┘  │
    │                                                          │
    │  Routes:                                                 │
    │  ┌──────────────────┐ ┌─────────────────────┐ ┌────────┐ │
    │  │ /api/v1/dental/* │ │ /api/v1/financial/* │ │/health │ │
    │  └──────────────────┘ └─────────────────────┘ └────────┘ │
    │                                                          │
    │  app.state.store     one Store (SQL in production)       │
    │  app.state.services  one EntityService per entity        │
    │                                                          │
    │  Exception Handlers:                                     │
    │  Validation→400 │ NotFound→404 │ Conflict→409 │ DB→500   │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect to the store and create tables if enabled
       (failure is logged at CRITICAL and re-raised: the process exits)

    Shutdown:
    1. Dispose the store (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from dental_saas import __version__
from dental_saas.config import settings
from dental_saas.entities import ENTITIES
from dental_saas.exceptions import (
    ConflictError,
    DatabaseError,
    DentalSaaSError,
    NotFoundError,
    ValidationError,
)
from dental_saas.middleware.logging import RequestLoggingMiddleware
from dental_saas.middleware.request_id import RequestIDMiddleware, request_id_var
from dental_saas.repositories.base import Store
from dental_saas.repositories.sql import SqlStore
from dental_saas.routes import dental, financial, health
from dental_saas.services.entity_service import EntityService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    Called once at startup, before the store is touched, so connection
    failures are logged with the configured format.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every statement/connection at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect the store on startup and release it on shutdown.

    An unreachable store at startup is fatal: serving requests that can only
    fail with 500 is worse than a crash loop the orchestrator can see.
    """
    setup_logging()
    store: Store = app.state.store
    logger.info("=" * 60)
    logger.info("Dental SaaS Backend %s starting up...", __version__)

    try:
        await store.startup()
    except Exception:
        logger.critical("Could not initialize the item store; shutting down", exc_info=True)
        raise

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Dental SaaS Backend shutting down...")
    await store.shutdown()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # The catch-all handler runs outside RequestIDMiddleware, after the
    # ContextVar is reset; request.state lives on the shared ASGI scope.
    return getattr(request.state, "request_id", "") or request_id_var.get("")


def _error_response(
    request: Request, status_code: int, error: str, message: str, details: Optional[dict] = None
) -> JSONResponse:
    content = {"error": error, "message": message, "request_id": _request_id(request)}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the shared error envelope.

    Handler table:
        ValidationError         → 400 validation_error
        RequestValidationError  → 400 invalid_request_body
        NotFoundError           → 404 not_found
        ConflictError           → 409 conflict
        DatabaseError           → 500 server_error (generic message)
        DentalSaaSError (base)  → 500 internal_server_error
        Exception (fallback)    → 500 internal_server_error

    Store details and stack traces are logged server-side only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", _request_id(request), exc.message)
        return _error_response(request, 400, "validation_error", exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body is not JSON, not an object, or a field has an unusable type."""
        errors = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        logger.warning("[%s] Invalid request body: %s", _request_id(request), errors)
        return _error_response(
            request, 400, "invalid_request_body", "Request body is not a valid JSON object",
            {"errors": errors},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(request, 404, "not_found", exc.message)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        logger.warning("[%s] Conflict: %s", _request_id(request), exc.message)
        return _error_response(request, 409, "conflict", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            _request_id(request), exc.message, exc.context,
        )
        return _error_response(
            request, 500, "server_error", "An internal error occurred. Please try again later."
        )

    @app.exception_handler(DentalSaaSError)
    async def handle_application_error(request: Request, exc: DentalSaaSError):
        logger.error("[%s] Unhandled application error: %s", _request_id(request), exc.message)
        return _error_response(
            request, 500, "internal_server_error", "An unexpected error occurred."
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s", _request_id(request), str(exc), exc_info=True
        )
        return _error_response(
            request, 500, "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def build_services(store: Store) -> dict:
    return {
        name: EntityService(entity, store.repository(name))
        for name, entity in ENTITIES.items()
    }


def create_app(store: Optional[Store] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Item store to serve from. Defaults to a SqlStore on
               settings.database_url; tests pass an in-memory store.

    The store and the per-entity services are attached to app.state here,
    not in the lifespan, so the app can serve requests without a lifespan
    run (httpx ASGITransport does not send lifespan events).
    """
    app = FastAPI(
        title="Dental SaaS API",
        description=(
            "CRUD backend for dental clinic management: dentists, patients, "
            "procedures and appointments, plus expenses, revenues and invoices."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    if store is None:
        store = SqlStore.from_url(settings.database_url)
    app.state.store = store
    app.state.services = build_services(store)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(dental.router)
    app.include_router(financial.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
