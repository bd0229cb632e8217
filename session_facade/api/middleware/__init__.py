"""
API Middleware Package

Middleware Components:
- logging: Request/response logging with header redaction and correlation IDs
"""

from session_facade.api.middleware.logging import (
    RequestLoggingMiddleware,
    redact_sensitive_headers,
)

__all__ = [
    "RequestLoggingMiddleware",
    "redact_sensitive_headers",
]
