"""
FastAPI application entry point.

User session authentication service: register, login, logout, health probe.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import api_router
from app.core.config import settings
from app.core.exceptions import AuthError, ValidationFailed
from app.db.database import engine, init_db, ping_db
from app.schemas.base import Envelope

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    The database must be reachable before requests are served; if it is not,
    the error propagates and the server process exits.
    """
    # Startup
    try:
        await ping_db()
    except Exception:
        logger.critical("Error connecting to the database; shutting down", exc_info=True)
        raise
    # Note: In production, use Alembic migrations instead of init_db
    if settings.create_tables_on_startup:
        await init_db()
    logger.info(f"{settings.app_name} listening on port {settings.port}")
    yield
    # Shutdown
    await engine.dispose()


def _envelope_response(envelope: Envelope) -> JSONResponse:
    return JSONResponse(status_code=envelope.status, content=envelope.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error, expected or not, in the response envelope."""

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
        return _envelope_response(Envelope.failure(exc.status_code, exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed bodies (not an object, wrong field types) count as missing input."""
        logger.debug(f"Request validation failed on {request.url.path}: {exc.errors()}")
        return _envelope_response(
            Envelope.failure(ValidationFailed.status_code, ValidationFailed.message)
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _envelope_response(Envelope.failure(exc.status_code, str(exc.detail)))

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected failures.

        The full traceback goes to the server log only; the client gets a
        generic message plus the exception's own message.
        """
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
        return _envelope_response(Envelope.failure(500, "Internal Server Error", str(exc)))


def create_application() -> FastAPI:
    """Create and configure FastAPI application."""

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="""
        ## User Session Authentication

        - **Register**: create an account (password stored as a bcrypt hash)
        - **Login**: open the account's single session
        - **Logout**: close it (idempotent)
        - **Health check**: liveness probe with no dependencies

        A user can be logged in from one place at a time; a second login is
        rejected until the first session logs out.

        Every response uses the envelope
        `{"status": int, "message": str, "data": object|array, "error": str|null}`.
        """,
        version=settings.app_version,
        openapi_url=f"{settings.api_prefix}/openapi.json",
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure properly in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API router
    app.include_router(api_router, prefix=settings.api_prefix)

    return app


# Create application instance
app = create_application()
