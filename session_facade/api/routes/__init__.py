"""Routes Package - API endpoint definitions.

- health: liveness and readiness
- session: namespaced session values for the calling client

Note: Import routers directly from individual modules to avoid circular imports.
Example: from session_facade.api.routes.session import router as session_router
"""

__all__ = ["health", "session"]
