"""
API Exception Handlers

Maps SessionFacadeException subclasses to JSON error responses:
- ProgrammerError -> 500 (a bug in the calling code, logged loudly)
- SessionLockError -> 423 Locked

Redis errors are not handled here and surface as ordinary server errors.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from session_facade.core.exceptions import (
    ProgrammerError,
    SessionFacadeException,
    SessionLockError,
)
from session_facade.models.responses import ErrorResponse


logger = logging.getLogger(__name__)


def _error_body(exc: SessionFacadeException) -> dict[str, Any]:
    code = getattr(exc.error_code, "value", exc.error_code)
    return ErrorResponse(error=str(code), message=exc.message).model_dump()


async def programmer_error_handler(request: Request, exc: ProgrammerError) -> JSONResponse:
    """Return 500 for API misuse and log the offending operation."""
    logger.error(
        f"Programmer error on {request.method} {request.url.path}: "
        f"operation={exc.operation} message={exc.message}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(exc),
    )


async def session_lock_error_handler(request: Request, exc: SessionLockError) -> JSONResponse:
    """Return 423 when the client's session is held by another request."""
    logger.warning(
        f"Session locked on {request.method} {request.url.path} "
        f"after {exc.timeout_seconds}s"
    )
    return JSONResponse(
        status_code=status.HTTP_423_LOCKED,
        content=_error_body(exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the session exception handlers on an application."""
    app.add_exception_handler(ProgrammerError, programmer_error_handler)
    app.add_exception_handler(SessionLockError, session_lock_error_handler)
