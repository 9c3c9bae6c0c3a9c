"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.

Run with the factory flag, settings are read once at startup::

    uvicorn vela.presentation.api.app:create_app --factory
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vela import __version__
from vela.infrastructure.persistence.sqlalchemy import (
    build_engine,
    build_session_maker,
    create_tables,
)
from vela.presentation.api.exception_handlers import setup_exception_handlers
from vela.presentation.api.middleware import register_middleware
from vela.presentation.api.routers import (
    auth_router,
    index_router,
    sessions_router,
    users_router,
)
from vela.presentation.api.schemas import HealthResponse
from vela_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging(log_level_str: str) -> None:
    """Configure application logging.

    Sets up logging for the vela packages with:
    - Console output with timestamps and module names
    - Configurable log level for vela modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,
    )

    logging.getLogger("vela").setLevel(log_level)
    logging.getLogger("vela_identity").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    # the request logging middleware already reports every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = __version__
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Sign-up, sign-in and the session lifecycle.

**Tokens:**
- Access tokens are short-lived (15 minutes by default) and go in the
  `Authorization: Bearer <token>` header
- Refresh tokens are long-lived (7 days by default) and are only accepted
  by `POST /auth/refresh`

**Sessions:**
- Every sign-in opens a new session; tokens are bound to it
- Signing out or changing the password invalidates sessions for good
""",
    },
    {
        "name": "Sessions",
        "description": "List and revoke your own sessions.",
    },
    {
        "name": "Users",
        "description": """User profiles and administration.

Listing, creating and deleting users requires the `admin` role.
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Owns the process-wide engine: created at startup, disposed at shutdown.
    """
    settings: Settings = app.state.settings
    logger.info("Starting %s API v%s...", settings.app_name, API_VERSION)

    engine = build_engine(
        settings.sqlalchemy_database_url,
        echo=settings.database_echo,
    )
    app.state.engine = engine
    app.state.session_maker = build_session_maker(engine)

    try:
        await create_tables(engine)
    except (ConnectionRefusedError, OSError):
        logger.critical("Could not connect to the database.")
        await engine.dispose()
        raise

    yield

    logger.info("Shutting down %s API...", settings.app_name)
    await engine.dispose()
    logger.info("Database connections closed")


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints."""
    v1_router = APIRouter()

    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    v1_router.include_router(sessions_router, prefix="/sessions", tags=["Sessions"])
    v1_router.include_router(users_router, prefix="/users", tags=["Users"])

    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Configuration for this application instance. Read from the
        environment when omitted.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings.log_level)

    docs_enabled = settings.api_docs_enabled

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Accounts, sessions and token authentication.",
        version=API_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )
    app.state.settings = settings

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_middleware(app)
    setup_exception_handlers(app, settings)

    app.include_router(index_router, prefix=API_V1_PREFIX, tags=["Info"])
    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint.

        Unversioned for load balancer/monitoring compatibility.
        """
        return HealthResponse(status="healthy", version=API_VERSION)

    return app
