"""
Health Router - Health Endpoints

- GET /health        liveness
- GET /health/ready  readiness (Redis reachable)

Redis is the session store; without it no session can be opened, so the
service reports not-ready when the ping fails.
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from redis.asyncio import Redis

from session_facade.api.deps import get_redis


logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    checks: dict[str, bool]


# =============================================================================
# Health Service
# =============================================================================


class HealthService:
    """
    Service class for dependency checks.

    Takes the Redis client as a dependency so tests can substitute a fake.
    """

    def __init__(self, redis_client: Redis) -> None:
        self._redis = redis_client

    async def check_redis(self) -> bool:
        """
        Check Redis connectivity.

        Returns:
            bool: True if Redis answers PING, False otherwise
        """
        try:
            await self._redis.ping()
            return True
        except Exception as e:
            logger.warning(f"Redis health check failed: {e}")
            return False


def get_health_service(redis: Redis = Depends(get_redis)) -> HealthService:
    """Dependency injection factory for HealthService."""
    return HealthService(redis_client=redis)


# =============================================================================
# Router
# =============================================================================

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(status="healthy", version=APP_VERSION)


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness(
    response: Response,
    health_service: HealthService = Depends(get_health_service),
) -> ReadinessResponse:
    """Readiness probe: 200 when Redis is reachable, 503 otherwise."""
    redis_ok = await health_service.check_redis()
    if not redis_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadinessResponse(status="not_ready", checks={"redis": False})
    return ReadinessResponse(status="ready", checks={"redis": True})
