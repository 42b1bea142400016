"""In-memory vector store over the persisted event embedding map.

The embeddings file is a JSON object ``{event_id: [float, ...]}`` produced
offline.  At startup it is loaded into a single L2-normalised numpy matrix;
a query is embedded through the injected :class:`IEmbeddingProvider` and
scored against every row with one matrix-vector product (cosine
similarity).  The dataset is a few thousand events at most, so brute force
is fast enough and needs no index structure.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Mapping, Sequence

import numpy as np
import structlog

from eventfinder.interfaces.embedding_provider import IEmbeddingProvider
from eventfinder.interfaces.vector_store_provider import IVectorStoreProvider, VectorMatch
from eventfinder.utils.errors import ConfigurationError, RAGError

logger = structlog.get_logger(logger_name=__name__)


def load_embedding_map(path: str | Path) -> dict[str, list[float]]:
    """Read the ``{event_id: vector}`` JSON file.

    Raises
    ------
    ConfigurationError
        If the file is missing or is not a JSON object.
    """
    embeddings_path = Path(path)
    try:
        with open(embeddings_path, encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as exc:
        raise ConfigurationError(
            message=f"Embeddings file not found: {embeddings_path}",
            provider_name="memory_vector_store",
        ) from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(
            message=f"Embeddings file unreadable: {embeddings_path}: {exc}",
            provider_name="memory_vector_store",
        ) from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(
            message=f"Embeddings file must contain a JSON object: {embeddings_path}",
            provider_name="memory_vector_store",
        )
    return raw


class MemoryVectorStore(IVectorStoreProvider):
    """Brute-force cosine similarity store held in a numpy matrix.

    Parameters
    ----------
    embedding_provider:
        Embeds query text at search time.
    vectors:
        Mapping of event id to embedding vector.
    event_ids:
        Optional ordering/whitelist; only ids present here are indexed, in
        this order.  Usually the event store's ids, so stale vectors for
        events no longer in the dataset are dropped.
    """

    def __init__(
        self,
        embedding_provider: IEmbeddingProvider,
        vectors: Mapping[str, Sequence[float]],
        event_ids: Iterable[str] | None = None,
    ) -> None:
        self._embedding_provider = embedding_provider
        ids = list(event_ids) if event_ids is not None else list(vectors.keys())

        kept_ids: list[str] = []
        rows: list[Sequence[float]] = []
        dimension: int | None = None
        skipped = 0
        for event_id in ids:
            vector = vectors.get(event_id)
            if not vector:
                continue
            if dimension is None:
                dimension = len(vector)
            if len(vector) != dimension:
                skipped += 1
                continue
            kept_ids.append(event_id)
            rows.append(vector)

        self._ids = kept_ids
        if rows:
            matrix = np.asarray(rows, dtype=np.float32)
            norms = np.linalg.norm(matrix, axis=1, keepdims=True)
            norms[norms == 0] = 1.0
            self._matrix = matrix / norms
        else:
            self._matrix = np.zeros((0, 0), dtype=np.float32)

        logger.info(
            "vector_store_loaded",
            vectors=len(self._ids),
            dimension=dimension,
            skipped_dimension_mismatch=skipped,
        )

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        embedding_provider: IEmbeddingProvider,
        event_ids: Iterable[str] | None = None,
    ) -> MemoryVectorStore:
        """Build a store from the persisted embeddings JSON file."""
        return cls(embedding_provider, load_embedding_map(path), event_ids=event_ids)

    # ------------------------------------------------------------------
    # IVectorStoreProvider implementation
    # ------------------------------------------------------------------

    async def query(self, query_text: str, top_k: int = 20) -> list[VectorMatch]:
        if top_k <= 0 or not self._ids:
            return []

        query_vector = np.asarray(
            await self._embedding_provider.embed_single(query_text), dtype=np.float32
        )
        if query_vector.shape != (self._matrix.shape[1],):
            raise RAGError(
                message=(
                    f"Query embedding has dimension {query_vector.shape[-1] if query_vector.ndim else 0}, "
                    f"index has {self._matrix.shape[1]}"
                ),
                provider_name=self.get_provider_name(),
            )

        norm = float(np.linalg.norm(query_vector))
        if norm > 0:
            query_vector = query_vector / norm

        scores = self._matrix @ query_vector
        limit = min(top_k, len(self._ids))
        # Stable sort keeps dataset order among equal scores.
        order = np.argsort(-scores, kind="stable")[:limit]
        return [VectorMatch(event_id=self._ids[i], score=float(scores[i])) for i in order]

    def count(self) -> int:
        return len(self._ids)

    def get_provider_name(self) -> str:
        return "memory_vector_store"

    def is_available(self) -> bool:
        return bool(self._ids) and self._embedding_provider.is_available()
