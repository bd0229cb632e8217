"""
Response Models - Session API

Pydantic response models for the /v1/session endpoints and error bodies.
"""

from typing import Any

from pydantic import BaseModel, Field


class SessionValueResponse(BaseModel):
    """A single namespaced session value."""

    key: str = Field(..., description="Key without the namespace prefix")
    value: Any = Field(default=None, description="Stored value")


class SessionValuesResponse(BaseModel):
    """All session values under the facade's namespace."""

    values: dict[str, Any] = Field(
        default_factory=dict,
        description="Mapping of un-prefixed keys to stored values",
    )


class ErrorResponse(BaseModel):
    """Error body returned by exception handlers."""

    error: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
