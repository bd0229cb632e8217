"""
Custom exceptions for the Session Facade service.

All exceptions inherit from SessionFacadeException and include error codes for
consistent error handling and API responses.

Backend failures (Redis connection errors, timeouts) are deliberately not part
of this hierarchy: they propagate to the caller unchanged.
"""

from enum import Enum
from typing import Any, Optional


# =============================================================================
# Error Codes Enum
# =============================================================================


class ErrorCode(str, Enum):
    """
    Error codes for Session Facade exceptions.

    These codes provide a consistent way to identify error types
    across the API and in logging.
    """

    SESSION_FACADE_ERROR = "SESSION_FACADE_ERROR"
    PROGRAMMER_ERROR = "PROGRAMMER_ERROR"
    SESSION_LOCK_ERROR = "SESSION_LOCK_ERROR"


# =============================================================================
# Base Exception
# =============================================================================


class SessionFacadeException(Exception):
    """
    Base exception for all Session Facade errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code from ErrorCode enum.
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.SESSION_FACADE_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            **kwargs: Additional attributes to set on the exception.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

        for key, value in kwargs.items():
            setattr(self, key, value)


# =============================================================================
# ProgrammerError
# =============================================================================


class ProgrammerError(SessionFacadeException):
    """
    Exception for misuse of the session API contract.

    Raised when operations are called in the wrong order, such as reading
    a value before the session is opened. It signals a bug in the calling
    code, not a runtime or environmental failure, and is never recovered
    from internally.

    Attributes:
        operation: Name of the misused operation (e.g. "SessionFacade.get()").
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        error_code: str = ErrorCode.PROGRAMMER_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.operation = operation


# =============================================================================
# SessionLockError
# =============================================================================


class SessionLockError(SessionFacadeException):
    """
    Exception raised when a session stays locked by another holder.

    Attributes:
        session_id: ID of the session that could not be acquired.
        timeout_seconds: How long acquisition was attempted.
    """

    def __init__(
        self,
        message: str,
        session_id: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        error_code: str = ErrorCode.SESSION_LOCK_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.session_id = session_id
        self.timeout_seconds = timeout_seconds
