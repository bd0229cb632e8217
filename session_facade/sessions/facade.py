"""
Session Facade - namespaced access to the request's session.

SessionFacade guards the session lifecycle and mediates reads and writes
under a key prefix, so its entries do not collide with other consumers of
the same flat session map.

Lifecycle:
    closed --open()--> open --close()--> closed
    any    --destroy()--> closed   (opens first if needed)

set(), get() and get_all() are only valid while open; calling them in any
other state is a programmer error and fails immediately.

One facade is created per request (see session_facade.api.deps); it holds
the backend and the open flag, and nothing else.
"""

import re
from typing import Any, Optional

from session_facade.core.exceptions import ProgrammerError
from session_facade.observability.logging import get_logger
from session_facade.sessions.backend import SessionBackend


logger = get_logger(__name__)

DEFAULT_PREFIX = "SessionFacade::"

_PARENT_DOMAIN_PATTERN = re.compile(r".*?([a-z0-9\-]+\.[a-z]+)$", re.IGNORECASE)


def parent_cookie_domain(host: str) -> str:
    """
    Derive the cookie domain covering a host and all its siblings.

    Strips subdomain labels, keeping the last two, and prefixes a dot.
    Hosts that do not look like ``name.tld`` are returned unchanged.

    Example:
        >>> parent_cookie_domain("www.sub.example.com")
        '.example.com'
        >>> parent_cookie_domain("localhost")
        'localhost'
    """
    return _PARENT_DOMAIN_PATTERN.sub(r".\1", host)


class SessionFacade:
    """
    Guarded, namespaced wrapper around a SessionBackend.

    Args:
        backend: The session backend for the current request.

    Example:
        >>> session = SessionFacade(backend)
        >>> await session.open()
        >>> session.set("user_id", 42)
        >>> session.get("user_id")
        42
        >>> await session.close()
    """

    def __init__(self, backend: SessionBackend) -> None:
        self._backend = backend
        self._open = False

    @property
    def is_open(self) -> bool:
        """True between open() and close()/destroy()."""
        return self._open

    @property
    def backend(self) -> SessionBackend:
        return self._backend

    def _require_open(self, method: str) -> None:
        if not self._open:
            operation = f"SessionFacade.{method}()"
            logger.warning("programmer_error", operation=operation)
            raise ProgrammerError(
                f"SessionFacade.open() must be called before {operation}",
                operation=operation,
            )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def configure_cross_subdomain_scope(self) -> None:
        """
        Scope the session cookie to the parent domain of the request host.

        A session started under ``sub.example.com`` is then also valid for
        ``example.com`` and its other subdomains. Must be called before open().

        Raises:
            ProgrammerError: If the session is already open.
        """
        if self._open:
            operation = "SessionFacade.configure_cross_subdomain_scope()"
            logger.warning("programmer_error", operation=operation)
            raise ProgrammerError(
                f"{operation} must be called before SessionFacade.open()",
                operation=operation,
            )

        domain = parent_cookie_domain(self._backend.request_host())
        self._backend.set_cookie_scope(0, "/", domain)
        logger.debug("cross_subdomain_scope_configured", domain=domain)

    async def open(self) -> None:
        """Start or resume the session. No-op if already open."""
        if self._open:
            return
        await self._backend.start_or_resume()
        self._open = True
        logger.debug("session_opened")

    async def close(self) -> None:
        """Write the session back and release it. No-op if already closed."""
        if not self._open:
            return
        await self._backend.write_and_release()
        self._open = False
        logger.debug("session_closed")

    async def destroy(self) -> None:
        """
        Erase the whole session, for every namespace, and expire its cookie.

        Opens the session first if needed; always ends closed.
        """
        await self.open()

        self._backend.values.clear()

        if self._backend.has_request_cookie():
            scope = self._backend.get_cookie_scope()
            self._backend.expire_cookie(
                self._backend.cookie_name, scope.path, scope.domain
            )

        await self._backend.destroy_session()
        self._open = False
        logger.info("session_destroyed")

    # =========================================================================
    # Namespaced values
    # =========================================================================

    def set(self, key: str, value: Any, prefix: str = DEFAULT_PREFIX) -> None:
        """
        Store a value under ``prefix + key``.

        Raises:
            ProgrammerError: If the session is not open.
        """
        self._require_open("set")
        self._backend.values[prefix + key] = value

    def get(
        self, key: str, default: Optional[Any] = None, prefix: str = DEFAULT_PREFIX
    ) -> Any:
        """
        Return the value under ``prefix + key``, or ``default`` if absent.

        A stored ``None`` counts as absent.

        Raises:
            ProgrammerError: If the session is not open.
        """
        self._require_open("get")
        value = self._backend.values.get(prefix + key)
        return default if value is None else value

    def get_all(self, prefix: str = DEFAULT_PREFIX) -> dict[str, Any]:
        """
        Return every value under ``prefix``, keyed without the prefix.

        Raises:
            ProgrammerError: If the session is not open.
        """
        self._require_open("get_all")
        return {
            key[len(prefix):]: value
            for key, value in self._backend.values.items()
            if key.startswith(prefix)
        }
