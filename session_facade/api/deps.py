"""
API Dependencies

This module provides FastAPI dependency injection functions for the API layer.

A session backend and facade are built per request. Handlers close the
facade themselves before returning; the dependency closes it again on the
way out, which only matters for a handler that exited early, since by then
the response has already been sent.

All dependencies can be overridden in tests using FastAPI's
dependency_overrides mechanism.
"""

from typing import AsyncIterator

from fastapi import Depends, Request, Response
from redis.asyncio import Redis

from session_facade.core.config import Settings, get_settings as _get_settings
from session_facade.sessions.backend import SessionBackend
from session_facade.sessions.facade import SessionFacade
from session_facade.sessions.redis_backend import RedisSessionBackend


# =============================================================================
# get_settings Dependency
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# get_redis Dependency
# =============================================================================


async def get_redis(request: Request) -> Redis:
    """
    Get the Redis client created at application startup.

    Returns:
        Redis: Shared async Redis client from app.state
    """
    return request.app.state.redis


# =============================================================================
# Session Dependencies
# =============================================================================


def get_session_backend(
    request: Request,
    response: Response,
    redis: Redis = Depends(get_redis),
    settings: Settings = Depends(get_settings),
) -> SessionBackend:
    """
    Build the session backend for the current request.

    Cookies the backend sets on ``response`` are merged into the
    response the endpoint returns.
    """
    return RedisSessionBackend(
        redis_client=redis,
        request=request,
        response=response,
        settings=settings,
    )


async def get_session(
    backend: SessionBackend = Depends(get_session_backend),
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[SessionFacade]:
    """
    Provide a request-scoped SessionFacade, closing it when the request ends.

    Yields:
        SessionFacade: Closed facade; handlers open it as needed.
    """
    session = SessionFacade(backend)
    if settings.cookie_cross_subdomain:
        session.configure_cross_subdomain_scope()
    try:
        yield session
    finally:
        await session.close()


__all__ = [
    "get_settings",
    "get_redis",
    "get_session_backend",
    "get_session",
]
