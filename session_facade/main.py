"""
Session Facade - Main Application Entry Point

This module provides the FastAPI application for the Session Facade service.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import redis.asyncio as aioredis
from fastapi import FastAPI

from session_facade.api.errors import register_exception_handlers
from session_facade.api.middleware.logging import RequestLoggingMiddleware
from session_facade.api.routes.health import router as health_router
from session_facade.api.routes.session import router as session_router
from session_facade.core.config import get_settings
from session_facade.observability.logging import configure_logging, get_logger

# Application metadata
APP_NAME = "Session Facade"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Namespaced access to per-client web sessions"


logger = get_logger(__name__)


# =============================================================================
# Lifespan Context Manager
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan: create the shared Redis client at startup and
    close it at shutdown.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, force=True)

    app.state.redis = aioredis.from_url(
        settings.redis_url,
        max_connections=settings.redis_pool_size,
        decode_responses=True,
    )
    app.state.initialized = True
    logger.info(
        "service_starting",
        service=settings.service_name,
        version=APP_VERSION,
        environment=settings.environment,
    )

    yield

    logger.info("service_stopping", service=settings.service_name)
    await app.state.redis.aclose()
    app.state.initialized = False


_settings = get_settings()

app = FastAPI(
    title=APP_NAME,
    description=APP_DESCRIPTION,
    version=APP_VERSION,
    docs_url="/docs" if _settings.environment != "production" else None,
    redoc_url="/redoc" if _settings.environment != "production" else None,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)
register_exception_handlers(app)

app.include_router(health_router)
app.include_router(session_router)


# =============================================================================
# Root Endpoint
# =============================================================================


@app.get("/", tags=["Info"])
async def root() -> dict[str, Any]:
    """Root endpoint returning basic service information."""
    return {
        "service": APP_NAME,
        "version": APP_VERSION,
        "docs": "/docs" if _settings.environment != "production" else "disabled",
    }
