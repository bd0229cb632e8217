"""
Core configuration module for the Session Facade service.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the SESSION_FACADE_ prefix.

Sections:
- Service configuration (name, environment, log level)
- Redis configuration (connection URL, pool size)
- Session record configuration (TTL, key prefix)
- Session cookie configuration (name, scope, security attributes)
- Session lock configuration (timeouts, polling)
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All fields use the SESSION_FACADE_ prefix for environment variables.
    Example: SESSION_FACADE_COOKIE_NAME=APPSESSID
    """

    # =========================================================================
    # Service Configuration
    # =========================================================================
    service_name: str = Field(
        default="session-facade",
        description="Name of the service for logging and identification",
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level for structured logging",
    )

    # =========================================================================
    # Redis Configuration
    # =========================================================================
    redis_url: str = Field(
        default="redis://localhost:6379",
        description="Redis connection URL for session records",
    )
    redis_pool_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Size of the Redis connection pool",
    )

    # =========================================================================
    # Session Record Configuration
    # =========================================================================
    session_ttl_seconds: int = Field(
        default=1440,
        ge=60,
        description="Lifetime of a stored session record, refreshed on every write",
    )
    session_key_prefix: str = Field(
        default="sessions:",
        description="Prefix for session record keys in Redis",
    )

    # =========================================================================
    # Session Cookie Configuration
    # =========================================================================
    cookie_name: str = Field(
        default="SESSIONID",
        min_length=1,
        description="Name of the cookie carrying the session id",
    )
    cookie_lifetime_seconds: int = Field(
        default=0,
        ge=0,
        description="Cookie max-age in seconds, 0 for a browser-session cookie",
    )
    cookie_path: str = Field(
        default="/",
        description="Path attribute of the session cookie",
    )
    cookie_domain: Optional[str] = Field(
        default=None,
        description="Domain attribute of the session cookie (None = host only)",
    )
    cookie_secure: bool = Field(
        default=False,
        description="Send the session cookie over HTTPS only",
    )
    cookie_httponly: bool = Field(
        default=True,
        description="Hide the session cookie from client-side scripts",
    )
    cookie_samesite: Literal["lax", "strict", "none"] = Field(
        default="lax",
        description="SameSite attribute of the session cookie",
    )
    cookie_cross_subdomain: bool = Field(
        default=False,
        description="Scope the session cookie to the parent domain of the request host",
    )

    # =========================================================================
    # Session Lock Configuration
    # Open acquires the lock, close releases it
    # =========================================================================
    lock_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Maximum time to wait for another holder to release a session",
    )
    lock_ttl_seconds: int = Field(
        default=30,
        ge=1,
        description="Expiry of a held lock, so crashed holders do not block forever",
    )
    lock_poll_interval_seconds: float = Field(
        default=0.05,
        gt=0,
        description="Delay between lock acquisition attempts",
    )

    model_config = {
        "env_prefix": "SESSION_FACADE_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    # =========================================================================
    # Field Validators
    # =========================================================================
    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: str) -> str:
        """Validate Redis URL format."""
        if not v.startswith(("redis://", "rediss://")):
            raise ValueError("Redis URL must start with redis:// or rediss://")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = v.upper()
        if level not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return level


# =============================================================================
# Settings Singleton
# =============================================================================


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses functools.lru_cache to ensure only one Settings instance is created.
    Tests that change the environment call get_settings.cache_clear().

    Returns:
        Settings: The application settings instance.
    """
    return Settings()
