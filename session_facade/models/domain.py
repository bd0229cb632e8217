"""
Domain Models - Session records and cookie scope.

SessionRecord is what a session backend persists per session id: the flat
string-keyed value map shared by every consumer of the session. CookieScope
describes the attributes used when the session cookie is issued or expired.

Pattern: Pydantic models for persistence serialization
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Session Record
# =============================================================================


class SessionRecord(BaseModel):
    """
    A persisted session: id, flat value map, timestamps.

    Every consumer of the session shares the same ``values`` map; the
    facade keeps its entries apart by prefixing keys.

    Attributes:
        id: Session identifier, also the session cookie value.
        values: Flat mapping of string keys to JSON-serialisable values.
        created_at: When the session was first started.
        updated_at: When the session was last written.

    Example:
        >>> record = SessionRecord(id="abc", values={"SessionFacade::user_id": 42})
        >>> SessionRecord.model_validate_json(record.model_dump_json()).values
        {'SessionFacade::user_id': 42}
    """

    id: str = Field(..., min_length=1, description="Session identifier")
    values: dict[str, Any] = Field(
        default_factory=dict,
        description="Flat session value map shared by all consumers",
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        description="Session start timestamp (UTC)",
    )
    updated_at: datetime = Field(
        default_factory=_utcnow,
        description="Last write timestamp (UTC)",
    )


# =============================================================================
# Cookie Scope
# =============================================================================


class CookieScope(BaseModel):
    """
    Attributes applied to the session cookie.

    Attributes:
        lifetime_seconds: Cookie max-age; 0 means a browser-session cookie.
        path: Cookie path.
        domain: Cookie domain, or None for a host-only cookie.
    """

    model_config = ConfigDict(frozen=True)

    lifetime_seconds: int = Field(default=0, ge=0)
    path: str = Field(default="/")
    domain: Optional[str] = Field(default=None)
