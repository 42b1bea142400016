"""Semantic retrieval over the event embeddings.

Thin wrapper around an :class:`IVectorStoreProvider` that speaks in event
ids.  It is built once at startup; when the store cannot be built (no
embeddings file, no embedding credential) the search service simply runs
without one.  Errors from the store are not caught here: the search
service decides the fallback for that one request.
"""

from __future__ import annotations

from eventfinder.interfaces.vector_store_provider import IVectorStoreProvider
from eventfinder.utils.concurrency import with_optional_timeout
from eventfinder.utils.logging import get_logger


class SemanticRetriever:
    """Returns event ids ordered by similarity to a query."""

    def __init__(self, vector_store: IVectorStoreProvider, timeout: float = 0.0) -> None:
        self._vector_store = vector_store
        self._timeout = timeout
        self._logger = get_logger(__name__)

    @property
    def provider_name(self) -> str:
        return self._vector_store.get_provider_name()

    def is_available(self) -> bool:
        return self._vector_store.is_available()

    def count(self) -> int:
        return self._vector_store.count()

    async def retrieve(self, query: str, k: int) -> list[str]:
        """Return at most *k* event ids, most similar first.

        Raises
        ------
        eventfinder.utils.errors.RAGError
            If the query cannot be embedded or scored.
        asyncio.TimeoutError
            If a timeout is configured and the store does not answer in time.
        """
        if k <= 0:
            return []
        matches = await with_optional_timeout(
            self._vector_store.query(query, top_k=k), self._timeout
        )
        self._logger.debug(
            "semantic_retrieval",
            query=query,
            k=k,
            hits=len(matches),
            top_score=matches[0].score if matches else None,
        )
        return [match.event_id for match in matches[:k]]
