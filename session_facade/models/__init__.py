"""
Models Package - Pydantic models for the Session Facade service.
"""

from session_facade.models.domain import CookieScope, SessionRecord
from session_facade.models.requests import SessionValueRequest
from session_facade.models.responses import (
    ErrorResponse,
    SessionValueResponse,
    SessionValuesResponse,
)

__all__ = [
    # Domain
    "SessionRecord",
    "CookieScope",
    # Requests
    "SessionValueRequest",
    # Responses
    "SessionValueResponse",
    "SessionValuesResponse",
    "ErrorResponse",
]
