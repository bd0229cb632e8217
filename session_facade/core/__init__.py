"""
Core module for the Session Facade service.

This module contains configuration and exceptions.
"""

from session_facade.core.config import Settings, get_settings
from session_facade.core.exceptions import (
    ErrorCode,
    ProgrammerError,
    SessionFacadeException,
    SessionLockError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "ErrorCode",
    "SessionFacadeException",
    "ProgrammerError",
    "SessionLockError",
]
