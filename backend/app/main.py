"""
News Archive API — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   ``create_app()`` registers middleware, exception handlers and routers;
       ``lifespan`` owns the MongoDB client.
Who:   Called by uvicorn (``uvicorn app.main:app``).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌────────┐ ┌─────────┐ ┌──────────┐ ┌──────┐ ┌──────┐  │
    │  │ Req ID │→│ Logging │→│ Security │→│ GZip │→│ CORS │  │
    │  └────────┘ └─────────┘ └──────────┘ └──────┘ └──────┘  │
    │                                                          │
    │  Routes:                                                 │
    │  ┌────────────────────────────┐ ┌─────────────┐          │
    │  │ /api/news (6 endpoints)    │ │ GET /health │          │
    │  └────────────────────────────┘ └─────────────┘          │
    │                                                          │
    │  Exception Handlers:                                     │
    │  ┌────────────────────────────────────────────────────┐  │
    │  │ Validation→400 │ State→400 │ NotFound→404 │ DB→500 │  │
    │  └────────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────────┘

Unhandled exceptions are answered by ``UnhandledErrorMiddleware``, the
innermost middleware, with a plain-text 500.

Lifecycle:
    Startup:  logging → Motor client → ping + ensure indexes
    Shutdown: close the Motor client
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

from app import __version__
from app.config import settings
from app.database import (
    create_mongo_client,
    dispose_client,
    get_news_collection,
    ping,
)
from app.exceptions import (
    ArticleStateError,
    NewsApiError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from app.middleware.errors import UnhandledErrorMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware
from app.middleware.security_headers import SecurityHeadersMiddleware
from app.repositories.article_repository import ArticleRepository
from app.routes import health, news

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s
    The request id comes from ``RequestIDLogFilter``; "-" outside a request.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Own the MongoDB client for the lifetime of the process.

    An unreachable server is logged but does not stop startup: requests
    then fail with 500 and ``/health`` reports ``unhealthy`` until the
    server comes back.
    """
    setup_logging()
    logger.info("News Archive API %s starting up...", __version__)

    client = create_mongo_client(settings)
    app.state.mongo_client = client
    app.state.news_collection = get_news_collection(client, settings)

    if await ping(client):
        logger.info(
            "MongoDB connected: database=%s collection=%s",
            settings.mongodb_database,
            settings.news_collection,
        )
        try:
            await ArticleRepository(app.state.news_collection).ensure_indexes()
        except StoreError as e:
            logger.error("Could not ensure indexes: %s", e.context)
    else:
        logger.error("MongoDB connection error: server not reachable at startup")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/api-docs", settings.backend_host, settings.backend_port)

    yield

    logger.info("News Archive API shutting down...")
    dispose_client(client)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(request: Request, exc: NewsApiError, include_details: bool = False) -> dict:
    body = {
        "error": exc.code,
        "message": exc.message,
        "request_id": getattr(request.state, "request_id", ""),
    }
    if include_details:
        body["details"] = exc.context
    return body


def _field_name(loc) -> str:
    """``("body", "title")`` → ``"title"``; the body itself → ``"body"``."""
    if loc and loc[0] == "body":
        return ".".join(str(part) for part in loc[1:] if isinstance(part, str)) or "body"
    return ".".join(str(part) for part in loc) or "body"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes.

    Handler hierarchy:
        ValidationError     → 400 Bad Request
        ArticleStateError   → 400 Bad Request (already archived / not archived)
        NotFoundError       → 404 Not Found
        StoreError          → 500 Internal Server Error (generic message)
        NewsApiError (base) → 500 Internal Server Error
        RequestValidationError → 400, same body as ValidationError

    Anything else is answered by ``UnhandledErrorMiddleware``.
    Store details (driver error types, ids) are logged, never returned.
    """

    def _validation_response(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning("Validation error: %s", exc.errors)
        return JSONResponse(
            status_code=400,
            content=_error_body(request, exc, include_details=True),
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return _validation_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ):
        # Malformed JSON, a missing body and non-object bodies land here
        # before the route runs.
        errors = [
            {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        return _validation_response(request, ValidationError(errors=errors))

    @app.exception_handler(ArticleStateError)
    async def handle_state_error(request: Request, exc: ArticleStateError):
        return JSONResponse(status_code=400, content=_error_body(request, exc))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=_error_body(request, exc))

    @app.exception_handler(NewsApiError)
    async def handle_server_error(request: Request, exc: NewsApiError):
        logger.error("%s: %s | Context: %s", type(exc).__name__, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "Internal server error",
                "request_id": getattr(request.state, "request_id", ""),
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="News API",
        description=(
            "CRUD API for news articles. Articles are listed while active, "
            "can be archived, and can be deleted once archived."
        ),
        version=__version__,
        docs_url="/api-docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        license_info={"name": "MIT", "url": "https://spdx.org/licenses/MIT.html"},
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition (last added runs first).
    origins = settings.cors_origins_list
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(news.router)
    app.include_router(health.router)

    return app


app = create_app()
