"""Session Facade - Source Package.

Namespaced, lifecycle-guarded access to per-client web sessions.

Note: Import `app` directly from `session_facade.main` to avoid circular imports.
"""

__all__ = ["main", "api", "core", "models", "observability", "sessions"]
