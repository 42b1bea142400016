"""Custom exception hierarchy for eventfinder.

All application exceptions inherit from :class:`EventFinderError`, which
carries an optional ``provider_name`` so error handlers can tell which
collaborator (e.g. "openai", "anthropic", "csv") caused the failure.

    EventFinderError  (base)
    +-- ConfigurationError       (startup / missing config)
    +-- EventSourceError         (event dataset could not be loaded)
    +-- LLMError                 (any LLM API call failure)
    +-- RAGError                 (embedding or vector-store failure)
    +-- SearchError              (search orchestration failure)

A ``ConfigurationError`` raised while building semantic search switches it
off.  ``LLMError`` and ``RAGError`` send a single request down its fallback
path.  ``EventSourceError`` at startup is fatal.
"""


class EventFinderError(Exception):
    """Base exception for all eventfinder errors.

    The ``__str__`` method prefixes the provider name in brackets for log
    output, e.g. ``[openai] Rate limit exceeded``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Startup / configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(EventFinderError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EventSourceError(EventFinderError):
    """Raised when the event dataset cannot be read or parsed."""

    def __init__(
        self,
        message: str = "Failed to load events",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# External service / provider errors
# ---------------------------------------------------------------------------

class LLMError(EventFinderError):
    """Raised when an LLM API call fails or returns an unparseable response."""

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RAGError(EventFinderError):
    """Raised when an embedding call or vector-store lookup fails."""

    def __init__(
        self,
        message: str = "Semantic retrieval failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Orchestration errors
# ---------------------------------------------------------------------------

class SearchError(EventFinderError):
    """Raised when the search pipeline cannot produce a result."""

    def __init__(
        self,
        message: str = "Search failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
