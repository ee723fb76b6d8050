"""
Employee API — FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires settings, the persistence gateway, middleware,
       exception handlers and routes into one FastAPI instance.
Who:   uvicorn (`employee_api.main:app`), the `employee-api` console script,
       and tests (which pass their own Settings and gateway).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌────────────┐ ┌───────────┐ ┌───────────────────┐  │
    │  │  Req ID    │→│  Logging  │→│  JSON Format      │  │
    │  └────────────┘ └───────────┘ └───────────────────┘  │
    │                                                      │
    │  Routes: /employees, /employees/{id:int32}           │
    │                                                      │
    │  Exception Handlers:                                 │
    │  ┌────────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound→404 │ Miss→404 msg   │  │
    │  │ Storage→500    │ Exception→500                 │  │
    │  └────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   configure logging, optionally create the employees table
    Shutdown:  dispose the gateway's connection pool
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_api import __version__
from employee_api.config import Settings, settings as default_settings
from employee_api.database import create_engine_from_settings, create_tables
from employee_api.exceptions import (
    NotFoundError,
    StorageError,
    ValidationError,
)
from employee_api.gateway import EmployeeGateway
from employee_api.middleware.json_format import JSONFormatMiddleware, NOT_FOUND_BODY
from employee_api.middleware.logging import RequestLoggingMiddleware
from employee_api.middleware.request_id import RequestIDMiddleware, request_id_var
from employee_api.routes import employees

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = {"error": "internal server error"}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout. Third-party loggers are lowered to WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: logging and optional table bootstrap. Shutdown: close the pool."""
    settings: Settings = app.state.settings
    gateway: EmployeeGateway = app.state.gateway

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings)
    logger.info("Employee API %s starting up...", __version__)

    if settings.db_create_tables:
        await create_tables(gateway.engine)
        logger.info("Ensured table 'employees' exists")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Employee API shutting down...")
    await gateway.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def format_validation_errors(exc: RequestValidationError) -> str:
    """
    Render FastAPI's validation errors as one message.

    Example:
        "body.age: Input should be a valid integer; body.fname: Input should be a valid string"
    """
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "Invalid input")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request body"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the service's response shapes.

    Handler hierarchy:
        RequestValidationError     → 400 {"error": ...} (body never reached a handler)
        ValidationError            → 400 {"error": ...}
        NotFoundError              → 404 empty body
        Starlette 404 / 405        → 404 {"message": "not found"}
        StorageError               → 500 {"error": "internal server error"}
        Exception (fallback)       → 500 {"error": "internal server error"}
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        message = format_validation_errors(exc)
        logger.warning("[%s] Invalid request body: %s", _request_id(request), message)
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning(
            "[%s] Rejected write: %s | Context: %s", _request_id(request), exc.message, exc.context
        )
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.debug("[%s] %s", _request_id(request), exc.message)
        return Response(status_code=404)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods are both routing misses
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content=NOT_FOUND_BODY)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        # Driver details stay in the log
        logger.error(
            "[%s] Storage error: %s | Context: %s", _request_id(request), exc.message, exc.context
        )
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            _request_id(request),
            str(exc),
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[EmployeeGateway] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use; defaults to the environment-loaded settings.
        gateway:  Persistence gateway to inject; by default one is built on a
                  new engine for settings.database_url.

    Returns:
        Configured FastAPI instance. The gateway is reachable as
        app.state.gateway and is what every route handler receives.
    """
    settings = settings or default_settings
    if gateway is None:
        gateway = EmployeeGateway(create_engine_from_settings(settings))

    app = FastAPI(
        title="Employee API",
        description="JSON CRUD service for employee records.",
        version=__version__,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.gateway = gateway

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → JSONFormat → routes
    app.add_middleware(JSONFormatMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(employees.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the module-level app with uvicorn."""
    uvicorn.run(
        "employee_api.main:app",
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )
