"""
Sessions Package

This package provides namespaced, lifecycle-guarded access to the request
session (SessionFacade) on top of a pluggable session backend, with a
Redis-backed implementation for Starlette/FastAPI.
"""

from session_facade.sessions.backend import SessionBackend
from session_facade.sessions.facade import (
    DEFAULT_PREFIX,
    SessionFacade,
    parent_cookie_domain,
)
from session_facade.sessions.redis_backend import RedisSessionBackend

__all__ = [
    "SessionBackend",
    "RedisSessionBackend",
    "SessionFacade",
    "DEFAULT_PREFIX",
    "parent_cookie_domain",
]
