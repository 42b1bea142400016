"""eventfinder FastAPI application entry point.

Wires providers, services and routes together.  Loads configuration from
``.env`` and ``config/config.yaml``, configures structured logging, and
builds the :class:`SearchService` during the lifespan startup so the first
request never pays for loading the dataset.

Also exposes :func:`build_search_service` for the CLI, which runs the same
pipeline without the web server.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from eventfinder.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from eventfinder.api.routes import router as api_router
from eventfinder.config.domain_knowledge import category_keywords_from_config
from eventfinder.config.loader import load_config
from eventfinder.config.settings import Settings
from eventfinder.interfaces.embedding_provider import IEmbeddingProvider
from eventfinder.interfaces.llm_provider import ILLMProvider
from eventfinder.providers.cache.memory_cache import MemoryCacheProvider
from eventfinder.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider
from eventfinder.providers.events.csv_event_source import CSVEventSource
from eventfinder.providers.llm.anthropic_provider import AnthropicLLMProvider
from eventfinder.providers.llm.openai_provider import OpenAILLMProvider
from eventfinder.providers.vector_store.memory_vector_store import (
    MemoryVectorStore,
    load_embedding_map,
)
from eventfinder.services.event_store import EventStore
from eventfinder.services.query_interpreter import (
    HeuristicQueryStrategy,
    LLMQueryStrategy,
    QueryInterpreter,
    QueryStrategy,
)
from eventfinder.services.search_service import RetrieverFactory, SearchService
from eventfinder.services.semantic_retriever import SemanticRetriever
from eventfinder.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
    log_to_stderr=settings.log_to_stderr,
)
_logger: structlog.BoundLogger = get_logger(__name__)

_APP_CONFIG: dict[str, Any] = config.get("app") or {}
_APP_VERSION = str(_APP_CONFIG.get("version", "0.1.0"))


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------


def _build_llm_provider(
    app_settings: Settings, http_client: httpx.AsyncClient | None = None
) -> ILLMProvider | None:
    """Select the first configured LLM provider.

    Priority order: Anthropic -> OpenAI-compatible.  Returns ``None`` when
    AI query parsing is disabled or no key is set.
    """
    if not app_settings.search_ai_parsing_enabled:
        return None
    if app_settings.anthropic_api_key:
        return AnthropicLLMProvider(settings=app_settings, http_client=http_client)
    if app_settings.openai_api_key:
        return OpenAILLMProvider(settings=app_settings, http_client=http_client)
    return None


def _build_embedding_provider(
    app_settings: Settings, http_client: httpx.AsyncClient | None = None
) -> IEmbeddingProvider | None:
    """Return the OpenAI-compatible embedder, or ``None`` if semantic search is off."""
    if not app_settings.search_semantic_enabled or not app_settings.openai_api_key:
        return None
    provider = OpenAIEmbeddingProvider(settings=app_settings, http_client=http_client)
    return provider if provider.is_available() else None


def _build_retriever_factory(
    app_settings: Settings, embedding_provider: IEmbeddingProvider | None
) -> RetrieverFactory | None:
    """Return a coroutine building the retriever once the store is loaded."""
    if embedding_provider is None:
        _logger.info("semantic_search_disabled", reason="no embedding provider configured")
        return None

    async def _factory(store: EventStore) -> SemanticRetriever:
        vectors = await asyncio.to_thread(load_embedding_map, app_settings.embeddings_path)
        vector_store = MemoryVectorStore(embedding_provider, vectors, event_ids=store.ids())
        return SemanticRetriever(
            vector_store, timeout=app_settings.search_external_timeout_seconds
        )

    return _factory


def build_search_service(
    app_settings: Settings,
    app_config: dict[str, Any] | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> SearchService:
    """Assemble a :class:`SearchService` from settings (not yet initialised)."""
    app_config = app_config or {}

    strategies: list[QueryStrategy] = []
    llm = _build_llm_provider(app_settings, http_client)
    if llm is not None:
        strategies.append(
            LLMQueryStrategy(llm, timeout=app_settings.search_external_timeout_seconds)
        )
    strategies.append(
        HeuristicQueryStrategy(category_keywords=category_keywords_from_config(app_config))
    )

    embedding_provider = _build_embedding_provider(app_settings, http_client)

    return SearchService(
        event_source=CSVEventSource(app_settings.events_csv_path),
        cache=MemoryCacheProvider(max_size=app_settings.search_cache_size),
        interpreter=QueryInterpreter(strategies),
        retriever_factory=_build_retriever_factory(app_settings, embedding_provider),
        semantic_top_k=app_settings.search_semantic_top_k,
        min_semantic_results=app_settings.search_min_semantic_results,
    )


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct every component stored on ``app.state``."""
    http_client = httpx.AsyncClient(timeout=30.0)
    search_service = build_search_service(app_settings, config, http_client)
    return {
        "settings": app_settings,
        "http_client": http_client,
        "search_service": search_service,
        "llm_providers": app_settings.get_available_llm_providers(),
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Build and initialise the search service on startup, clean up on shutdown."""
    components = _build_all(settings)

    for key, value in components.items():
        setattr(application.state, key, value)

    http_client: httpx.AsyncClient = components["http_client"]
    try:
        # A dataset that cannot be loaded aborts startup.
        await components["search_service"].initialize()

        _logger.info(
            "app_startup",
            version=_APP_VERSION,
            environment=_APP_CONFIG["env"],
            llm_providers=components["llm_providers"],
        )

        yield
    finally:
        await http_client.aclose()
        _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="eventfinder API",
        version=_APP_VERSION,
        description=(
            "Browse events and search them with free text. Queries are split "
            "into filters and a semantic phrase, then ranked by embedding "
            "similarity or keyword scoring."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=settings.get_cors_origins())

    application.include_router(api_router)
    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "eventfinder.main:app",
        host=_APP_CONFIG["host"],
        port=_APP_CONFIG["port"],
        reload=(_APP_CONFIG["env"] == "development"),
    )
