"""
Postboard: FastAPI Application Factory
======================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() returns a configured FastAPI instance; module-level `app`
       is what uvicorn serves (uvicorn postboard.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                     FastAPI App                      │
    │                                                      │
    │  Middleware: Request ID → Logging → CORS             │
    │                                                      │
    │  Routes:                                             │
    │    /api/posts            POST, GET                   │
    │    /api/posts/{post_id}  GET, DELETE, PATCH  (id ✓)  │
    │    /health               GET                         │
    │                                                      │
    │  Exception Handlers:                                 │
    │    ValidationError / RequestValidationError → 400    │
    │    NotFoundError → 404 (empty)  RepositoryError → 500│
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log the listening address
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from postboard import __version__
from postboard.config import settings
from postboard.database import dispose_engine
from postboard.exceptions import (
    NotFoundError,
    PostboardError,
    RepositoryError,
    ValidationError,
)
from postboard.middleware.logging import RequestLoggingMiddleware
from postboard.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from postboard.routes import health, posts

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during startup, before anything else logs.
    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # postboard.access replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Postboard %s starting up", __version__)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Postboard shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # The ContextVar is already reset by the time ServerErrorMiddleware runs
    # the catch-all handler; request.state still has the ID.
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _describe_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Flatten Pydantic error dicts to {"field", "message", "type"}.

    loc ("body", "tags", 0) becomes field "tags.0"; a missing body becomes "body".
    """
    described = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        field = ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc)
        described.append(
            {"field": field, "message": err.get("msg", ""), "type": err.get("type", "")}
        )
    return described


def _server_error(request: Request, exc: PostboardError, error: str, message: str) -> JSONResponse:
    details = None
    if settings.expose_error_details:
        details = {"reason": exc.context.get("reason", exc.message)}
    return JSONResponse(
        status_code=500,
        content={
            "error": error,
            "message": message,
            "details": details,
            "request_id": _request_id(request),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler table:
        ValidationError         → 400 (malformed post id)
        RequestValidationError  → 400 (body does not match PostCreate/PostUpdate)
        NotFoundError           → 404, empty body
        RepositoryError         → 500, generic message
        PostboardError (base)   → 500, generic message
        Exception (fallback)    → 500, generic message

    Full error detail for 500s goes to the server log with the request ID.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = _request_id(request)
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = _request_id(request)
        errors = _describe_validation_errors(exc.errors())
        message = "Request body is invalid"
        if errors:
            message = f"{errors[0]['field']}: {errors[0]['message']}"
        logger.warning("[%s] Request body rejected: %s", rid, message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": message,
                "details": {"errors": errors},
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.info("[%s] %s", _request_id(request), exc.message)
        return Response(status_code=404)

    @app.exception_handler(RepositoryError)
    async def handle_repository_error(request: Request, exc: RepositoryError):
        rid = _request_id(request)
        logger.error("[%s] Repository error: %s | Context: %s", rid, exc.message, exc.context)
        return _server_error(
            request,
            exc,
            error="server_error",
            message="An internal error occurred. Please try again later.",
        )

    @app.exception_handler(PostboardError)
    async def handle_app_error(request: Request, exc: PostboardError):
        rid = _request_id(request)
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return _server_error(
            request,
            exc,
            error="server_error",
            message="An internal error occurred. Please try again later.",
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _server_error(
            request,
            PostboardError(message=str(exc)),
            error="internal_server_error",
            message="An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns a fresh instance each call; tests build one per test and override
    get_db_session / get_post_repository on it.
    """
    app = FastAPI(
        title="Postboard API",
        description="Create, list, read, partially update and delete blog posts.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(posts.collection_router, prefix=settings.api_prefix)
    app.include_router(posts.item_router, prefix=settings.api_prefix)
    app.include_router(health.router)

    return app


app = create_app()
