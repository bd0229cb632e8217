"""
Request Models - Session API

Pydantic request models for the /v1/session endpoints.
"""

from typing import Any

from pydantic import BaseModel, Field


class SessionValueRequest(BaseModel):
    """Body of PUT /v1/session/{key}."""

    value: Any = Field(..., description="JSON value to store under the key")
