"""FastAPI routes for the events API.

Every endpoint is served both bare and under ``/api`` so the same front
end works against a local dev server and a deployment that mounts the API
under a prefix.

    /events,  /api/events      GET     Full dataset
    /search,  /api/search      POST    Smart search
    /api/health                GET     Readiness and capability snapshot
    any of the above           OPTIONS 200, empty body ("OK" for a CORS preflight)

Service dependencies are resolved from ``app.state`` via ``Depends`` using
the ``Annotated`` pattern.
"""

from __future__ import annotations

from typing import Annotated, Any, Iterable

import structlog
from fastapi import APIRouter, Depends, Request, Response

from eventfinder.api.schemas import ErrorResponse, HealthResponse, SearchRequest
from eventfinder.models.event import Event
from eventfinder.services.search_service import SearchService
from eventfinder.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter()

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {500: {"model": ErrorResponse}}


def _get_search_service(request: Request) -> SearchService:
    """Return the search service from application state."""
    return request.app.state.search_service


SearchServiceDep = Annotated[SearchService, Depends(_get_search_service)]


def _serialize(events: Iterable[Event]) -> list[dict[str, Any]]:
    return [event.model_dump(mode="json") for event in events]


@router.get("/events", responses=_ERROR_RESPONSES, summary="List all events")
@router.get("/api/events", responses=_ERROR_RESPONSES, include_in_schema=False)
async def list_events(service: SearchServiceDep) -> list[dict[str, Any]]:
    """Return every event in ingestion order."""
    return _serialize(await service.events())


@router.post("/search", responses=_ERROR_RESPONSES, summary="Smart event search")
@router.post("/api/search", responses=_ERROR_RESPONSES, include_in_schema=False)
async def search_events(
    service: SearchServiceDep, body: SearchRequest | None = None
) -> list[dict[str, Any]]:
    """Interpret the query, filter, rank and return matching events."""
    body = body or SearchRequest()
    results = await service.search(body.query, body.filters)
    return _serialize(results)


@router.get("/api/health", response_model=HealthResponse, summary="Service health")
async def health_check(request: Request, service: SearchServiceDep) -> HealthResponse:
    """Report initialisation state, dataset size and enabled capabilities."""
    return HealthResponse(version=request.app.version, **service.health())


@router.options("/events", include_in_schema=False)
@router.options("/api/events", include_in_schema=False)
@router.options("/search", include_in_schema=False)
@router.options("/api/search", include_in_schema=False)
@router.options("/api/health", include_in_schema=False)
async def preflight() -> Response:
    """Answer bare OPTIONS requests that are not CORS preflights."""
    return Response(status_code=200)
