"""Utility modules for eventfinder.

- **errors** -- Domain exception hierarchy rooted at EventFinderError.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **concurrency** -- one-shot async initialisation and optional timeouts
  around external calls.
- **text** -- date/time parsing and keyword helpers shared by the filter
  engine, ranker and heuristic query parser.
"""

from eventfinder.utils.concurrency import OneShot, with_optional_timeout
from eventfinder.utils.errors import (
    ConfigurationError,
    EventFinderError,
    EventSourceError,
    LLMError,
    RAGError,
    SearchError,
)
from eventfinder.utils.logging import bind_request_context, configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "EventFinderError",
    "EventSourceError",
    "LLMError",
    "OneShot",
    "RAGError",
    "SearchError",
    "bind_request_context",
    "configure_logging",
    "get_logger",
    "with_optional_timeout",
]
