"""API Package - FastAPI routes, middleware, dependencies, and error handlers.

Components:
- routes: API endpoint routers (health, session)
- middleware: Request/response logging
- deps: FastAPI dependency injection functions
- errors: Exception-to-response mapping

Note: Import routers directly from session_facade.api.routes to avoid circular imports.
"""

__all__ = ["routes", "middleware", "deps", "errors"]
