"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from usergate.infrastructure.persistence.sqlalchemy.init_db import (
    check_connection,
    create_tables,
)
from usergate.presentation.api.dependencies import get_engine
from usergate.presentation.api.exception_handlers import setup_exception_handlers
from usergate.presentation.api.routers import auth_router, users_router
from usergate.presentation.api.schemas.common import HealthResponse
from usergate_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# API version info
API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Login and bearer token handling.

**Login:**
- Exchange username and password for a signed JWT
- Unknown usernames and wrong passwords get the same answer
- Accounts with a non-active status are refused

**Tokens:**
- Send as `Authorization: Bearer <token>`
- Expired tokens answer 401, invalid tokens 403
""",
    },
    {
        "name": "Users",
        "description": """User records.

- Create users (passwords are stored as bcrypt hashes)
- Fetch by id, by username, or the caller's own profile
- Replace a password

Responses never include the stored password.
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


@lru_cache(maxsize=1)
def _configure_logging(log_level_name: str) -> None:
    """Configure application logging.

    Console output with timestamps and module names, the configured level
    for usergate modules and WARNING for noisy third-party libraries.
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,
    )

    for name in ("usergate", "usergate_auth", "usergate_config"):
        logging.getLogger(name).setLevel(log_level)

    # Quiet down noisy third-party loggers
    for name in ("httpx", "httpcore", "sqlalchemy.engine", "aiosqlite", "asyncpg"):
        logging.getLogger(name).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting UserGate API v%s...", API_VERSION)
    engine = get_engine()
    await _init_database_schema(engine)
    yield

    # Dispose the shared engine and its connection pool
    logger.info("Shutting down UserGate API...")
    await engine.dispose()
    logger.info("Database connections closed")


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Create missing tables and verify connectivity."""
    try:
        await create_tables(engine)
        await check_connection(engine)
    except (OSError, SQLAlchemyError):
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints."""
    v1_router = APIRouter()
    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    v1_router.include_router(users_router, prefix="/users", tags=["Users"])
    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Authentication and user management.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app, settings.diagnostic_level)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint.

        Unversioned for load balancer/monitoring compatibility.
        """
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            environment=settings.environment,
        )

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        """API root endpoint with version information."""
        return {
            "name": f"{settings.app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "auth": f"{API_V1_PREFIX}/auth",
                "users": f"{API_V1_PREFIX}/users",
            },
        }

    return app


def main() -> None:
    """Run the API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "usergate.presentation.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
