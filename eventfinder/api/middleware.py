"""API middleware: CORS, request logging, and error handling.

Starlette middleware is a stack (last added runs first).  ``create_app``
adds ErrorHandlingMiddleware before RequestLoggingMiddleware, so the
request log sees the final status code even when an error was turned into
a JSON 500 body.
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from eventfinder.api.schemas import ErrorResponse
from eventfinder.utils.errors import EventFinderError
from eventfinder.utils.logging import bind_request_context, get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

_SEARCH_FAILED = "Search failed. Please try again."
_EVENTS_FAILED = "Failed to load events"
_GENERIC_FAILED = "Internal server error"

_REQUEST_ID_HEADER = "X-Request-ID"


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware to the FastAPI application.

    Parameters
    ----------
    app:
        The FastAPI application instance.
    allowed_origins:
        Explicit list of allowed origins.  Defaults to ``["*"]``; with the
        wildcard, credentials are not allowed so browsers accept the
        literal ``*`` header.
    """
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[_REQUEST_ID_HEADER],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with its status code and duration.

    Binds a request id (the caller's ``X-Request-ID`` or a fresh one) into
    the structlog context so search and provider logs can be correlated,
    and echoes it back in the response headers.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = bind_request_context(
            str(request.url.path), request.headers.get(_REQUEST_ID_HEADER)
        )
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            response.headers[_REQUEST_ID_HEADER] = request_id
            return response
        finally:
            _logger.info(
                "http_request",
                method=request.method,
                status=response.status_code if response else 500,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


def _public_error(path: str) -> str:
    if path.rstrip("/").endswith("/search"):
        return _SEARCH_FAILED
    if path.rstrip("/").endswith("/events"):
        return _EVENTS_FAILED
    return _GENERIC_FAILED


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turn any exception escaping a route into a 500 ``{error, details}`` body.

    ``EventFinderError`` subclasses are logged as application errors with
    their provider; anything else is logged with its traceback.  The client
    gets a fixed message for the endpoint plus the exception message.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        path = str(request.url.path)
        try:
            return await call_next(request)
        except EventFinderError as exc:
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=path,
            )
            details = exc.message
        except Exception as exc:
            _logger.exception(
                "unhandled_error",
                error_type=type(exc).__name__,
                path=path,
            )
            details = str(exc) or type(exc).__name__

        body = ErrorResponse(error=_public_error(path), details=details)
        return JSONResponse(status_code=500, content=body.model_dump())
