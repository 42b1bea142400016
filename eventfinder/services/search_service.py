"""Search orchestrator.

Owns the process-wide state (event store, optional semantic retriever,
result cache) and runs the per-request pipeline:

    ParseQuery -> ApplyFilters -> Retrieve -> Rerank/Fallback -> Cache -> Respond

  1. An empty or whitespace query returns the whole store; nothing is
     interpreted or cached.
  2. The cache is keyed by the exact raw query string.
  3. The interpreter yields a semantic phrase and filters; filters the
     caller passes explicitly win field by field.
  4. Any set filter narrows the full store.
  5. With a semantic phrase and a retriever, the top
     ``min(len(candidates), semantic_top_k)`` ids are intersected with the
     candidates (candidate order kept).  If that leaves fewer than
     ``min_semantic_results`` hits out of a larger candidate set, the
     lexical ranking is used instead when it is longer.  A failing
     retrieval falls back to the lexical ranking for that request only.
  6. With a semantic phrase and no retriever, the lexical ranking is used.
  7. Without a semantic phrase the candidates are returned unranked.

Requests that carry explicit filters bypass the cache, since the cache key
is the raw query alone.

Initialisation runs once through :class:`OneShot`: concurrent callers wait
on the same load and nobody sees a half-built store.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from eventfinder.interfaces.cache_provider import ICacheProvider
from eventfinder.interfaces.event_source import IEventSource
from eventfinder.models.event import Event
from eventfinder.models.search import SearchFilters
from eventfinder.services.event_store import EventStore
from eventfinder.services.filter_engine import filter_events
from eventfinder.services.lexical_ranker import rank_events
from eventfinder.services.query_interpreter import QueryInterpreter
from eventfinder.services.semantic_retriever import SemanticRetriever
from eventfinder.utils.concurrency import OneShot
from eventfinder.utils.errors import EventFinderError
from eventfinder.utils.logging import get_logger

RetrieverFactory = Callable[[EventStore], Awaitable[Optional[SemanticRetriever]]]


@dataclass(frozen=True)
class SearchState:
    """Everything built at initialisation."""

    store: EventStore
    retriever: SemanticRetriever | None


class SearchService:
    """Coordinates interpretation, filtering, retrieval, ranking and caching.

    Parameters
    ----------
    event_source:
        Loads the dataset once during :meth:`initialize`.
    cache:
        Result cache keyed by raw query string.
    interpreter:
        Query interpreter; defaults to the keyword heuristic alone.
    retriever_factory:
        Builds the semantic retriever from the loaded store.  May return
        ``None`` or raise :class:`EventFinderError`; either way semantic
        search is switched off for the life of the process.
    semantic_top_k:
        Upper bound on ids requested from the retriever.
    min_semantic_results:
        Below this many semantic hits the lexical ranking may take over.
    """

    def __init__(
        self,
        event_source: IEventSource,
        cache: ICacheProvider,
        interpreter: QueryInterpreter | None = None,
        retriever_factory: RetrieverFactory | None = None,
        semantic_top_k: int = 50,
        min_semantic_results: int = 5,
    ) -> None:
        self._event_source = event_source
        self._cache = cache
        self._interpreter = interpreter or QueryInterpreter()
        self._retriever_factory = retriever_factory
        self._semantic_top_k = semantic_top_k
        self._min_semantic_results = min_semantic_results
        self._init = OneShot(self._build_state, name="search_service")
        self._logger = get_logger(__name__)

    @property
    def interpreter(self) -> QueryInterpreter:
        return self._interpreter

    # -- Lifecycle ------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._init.is_done

    @property
    def is_initializing(self) -> bool:
        return self._init.is_running

    async def initialize(self) -> SearchState:
        """Load the store and retriever, once; safe to call concurrently."""
        return await self._init.get()

    async def _build_state(self) -> SearchState:
        store = await EventStore.from_source(self._event_source)
        retriever = await self._build_retriever(store)
        self._logger.info(
            "search_initialized",
            events=len(store),
            categories=len(store.categories),
            semantic_search=retriever is not None,
            vectors=retriever.count() if retriever is not None else 0,
        )
        return SearchState(store=store, retriever=retriever)

    async def _build_retriever(self, store: EventStore) -> SemanticRetriever | None:
        if self._retriever_factory is None:
            return None
        try:
            retriever = await self._retriever_factory(store)
        except EventFinderError as exc:
            self._logger.warning("semantic_retriever_unavailable", reason=str(exc))
            return None
        if retriever is not None and not retriever.is_available():
            self._logger.warning(
                "semantic_retriever_unavailable",
                reason="no vectors loaded or embedding provider not configured",
                provider=retriever.provider_name,
            )
            return None
        return retriever

    # -- Queries --------------------------------------------------------------

    async def events(self) -> tuple[Event, ...]:
        """Return the full dataset in ingestion order."""
        state = await self.initialize()
        return state.store.events

    async def search(
        self, query: str | None, filters: SearchFilters | None = None
    ) -> list[Event]:
        """Run the search pipeline for *query*.

        Parameters
        ----------
        query:
            Raw user text.  ``None`` is treated like an empty string.
        filters:
            Optional explicit filters, merged over the interpreted ones.
        """
        state = await self.initialize()
        store = state.store
        raw = query or ""
        explicit = filters if filters is not None and not filters.is_empty() else None

        if not raw.strip():
            if explicit is None:
                return list(store.events)
            return filter_events(store.events, explicit)

        started = time.perf_counter()
        use_cache = explicit is None
        if use_cache:
            cached = await self._cache.get(raw)
            if cached is not None:
                self._logger.info("search_cache_hit", query=raw, results=len(cached))
                return list(cached)

        parsed = await self._interpreter.interpret(raw, store.categories)
        effective = parsed.filters.merged_with(explicit)
        candidates = (
            list(store.events) if effective.is_empty() else filter_events(store.events, effective)
        )

        results, path = await self._rank(parsed.semantic_query, candidates, state.retriever)

        if use_cache:
            await self._cache.set(raw, tuple(results))

        self._logger.info(
            "search_completed",
            query=raw,
            strategy=parsed.strategy,
            path=path,
            candidates=len(candidates),
            results=len(results),
            cached=use_cache,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return results

    async def _rank(
        self,
        semantic_query: str,
        candidates: list[Event],
        retriever: SemanticRetriever | None,
    ) -> tuple[list[Event], str]:
        """Order *candidates* for *semantic_query*; returns (results, path label)."""
        if not semantic_query:
            return candidates, "filters_only"
        if retriever is None or not candidates:
            return rank_events(semantic_query, candidates), "lexical"

        k = min(len(candidates), self._semantic_top_k)
        try:
            ids = await retriever.retrieve(semantic_query, k)
        except Exception as exc:
            self._logger.warning(
                "semantic_retrieval_failed",
                query=semantic_query,
                reason=str(exc) or type(exc).__name__,
            )
            return rank_events(semantic_query, candidates), "lexical_fallback"

        hit_ids = set(ids)
        semantic = [event for event in candidates if event.id in hit_ids]

        if (
            len(semantic) < self._min_semantic_results
            and len(candidates) > self._min_semantic_results
        ):
            lexical = rank_events(semantic_query, candidates)
            if len(lexical) > len(semantic):
                self._logger.debug(
                    "semantic_results_thin",
                    semantic=len(semantic),
                    lexical=len(lexical),
                )
                return lexical, "lexical_override"

        return semantic, "semantic"

    # -- Introspection --------------------------------------------------------

    def health(self) -> dict[str, Any]:
        """Snapshot of service readiness for the health endpoint."""
        state = self._init.peek()
        return {
            "status": "ok" if self.is_initialized else "initializing",
            "is_initialized": self.is_initialized,
            "is_initializing": self.is_initializing,
            "events": len(state.store) if state else 0,
            "semantic_search": bool(state and state.retriever is not None),
            "ai_query_parsing": self._interpreter.has_llm(),
            "cache_size": self._cache.size(),
        }
