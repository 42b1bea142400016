"""Abstract base class for vector-store service providers.

Defines the contract for nearest-neighbour lookup over the persisted
``{event_id: vector}`` map.  The in-memory numpy store is the only
implementation today; a hosted vector database could implement the same
interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class VectorMatch:
    """One nearest-neighbour hit.

    Attributes
    ----------
    event_id:
        Id of the matched event.
    score:
        Cosine similarity between the query and the event vector.
    """

    event_id: str
    score: float


# Concrete implementation: MemoryVectorStore (eventfinder/providers/vector_store/)
class IVectorStoreProvider(ABC):
    """Contract for semantic lookup used by the search service."""

    @abstractmethod
    async def query(self, query_text: str, top_k: int = 20) -> list[VectorMatch]:
        """Embed *query_text* and return up to *top_k* matches, best first.

        No similarity threshold is applied: a non-empty store always
        returns ``min(top_k, count())`` matches.

        Raises
        ------
        eventfinder.utils.errors.RAGError
            If embedding the query or scoring fails.
        """

    @abstractmethod
    def count(self) -> int:
        """Return the number of indexed vectors."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this store."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the store holds vectors and can embed queries."""
