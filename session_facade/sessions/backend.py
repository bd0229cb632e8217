"""
Session Backend Interface

This module defines the abstract base class for session backends: the
host-side subsystem that stores per-client key/value data across requests
and carries the session id to the client in a cookie.

Design Pattern:
- Ports and Adapters (Hexagonal Architecture)
- SessionBackend serves as the "port" (interface)
- RedisSessionBackend serves as the "adapter"

SessionFacade only sequences calls into this contract; any storage,
serialization, cookie transport or locking lives behind it.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from session_facade.models.domain import CookieScope


class SessionBackend(ABC):
    """
    Abstract base class for session backends.

    A backend instance serves a single request. Its value map is only
    meaningful between start_or_resume() and write_and_release() (or
    destroy_session()).

    Methods:
        start_or_resume: Begin a new session or resume the client's session
        write_and_release: Persist pending changes and release the session
        destroy_session: Delete the server-side session record
        set_cookie_scope / get_cookie_scope: Cookie attribute configuration
        has_request_cookie: Whether the request carried the session cookie
        expire_cookie: Delete a cookie client-side
        request_host: Host name of the current request

    Properties:
        values: Mutable session value map
        cookie_name: Name of the session cookie
    """

    # =========================================================================
    # Session lifecycle
    # =========================================================================

    @abstractmethod
    async def start_or_resume(self) -> None:
        """
        Begin a session, binding it to an id carried by the session cookie.

        Resumes the client's existing session when the request carries a
        known id, otherwise starts an empty one. Blocks while another holder
        has the same session open.
        """
        ...

    @abstractmethod
    async def write_and_release(self) -> None:
        """Persist the value map and release the session for other holders."""
        ...

    @abstractmethod
    async def destroy_session(self) -> None:
        """Delete the server-side session record entirely."""
        ...

    # =========================================================================
    # Value map
    # =========================================================================

    @property
    @abstractmethod
    def values(self) -> dict[str, Any]:
        """Flat session value map, shared by every consumer of the session."""
        ...

    # =========================================================================
    # Cookie transport
    # =========================================================================

    @property
    @abstractmethod
    def cookie_name(self) -> str:
        """Name of the cookie carrying the session id."""
        ...

    @abstractmethod
    def set_cookie_scope(
        self, lifetime_seconds: int, path: str, domain: Optional[str]
    ) -> None:
        """
        Configure cookie attributes used on the next session start.

        Args:
            lifetime_seconds: Cookie max-age; 0 for a browser-session cookie.
            path: Cookie path.
            domain: Cookie domain, or None for a host-only cookie.
        """
        ...

    @abstractmethod
    def get_cookie_scope(self) -> CookieScope:
        """Return the current cookie attribute configuration."""
        ...

    @abstractmethod
    def has_request_cookie(self) -> bool:
        """Return True if the incoming request carried the session cookie."""
        ...

    @abstractmethod
    def expire_cookie(self, name: str, path: str, domain: Optional[str]) -> None:
        """Issue a response cookie with an expiry in the past."""
        ...

    @abstractmethod
    def request_host(self) -> str:
        """Return the host name the current request was addressed to."""
        ...
