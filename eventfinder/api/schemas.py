"""Pydantic request/response schemas for the eventfinder HTTP API.

Event payloads are not wrapped in a schema: ``/events`` and ``/search``
return the bare JSON array of events the front end already consumes, with
the dataset's column names as keys.
"""

from __future__ import annotations

from pydantic import BaseModel

from eventfinder.models.search import SearchFilters


class SearchRequest(BaseModel):
    """Body of ``POST /search``.

    A missing or blank ``query`` returns every event.  ``filters`` is
    optional and overrides whatever the query interpreter extracts.
    """

    query: str | None = None
    filters: SearchFilters | None = None


class ErrorResponse(BaseModel):
    """Standard 500 body."""

    error: str
    details: str | None = None


class HealthResponse(BaseModel):
    """Readiness snapshot for ``GET /api/health``."""

    status: str
    version: str
    is_initialized: bool
    is_initializing: bool
    events: int = 0
    semantic_search: bool = False
    ai_query_parsing: bool = False
    cache_size: int = 0
