"""HTTP layer: routes, request/response schemas and middleware."""

from eventfinder.api.routes import router

__all__ = ["router"]
