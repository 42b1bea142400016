"""Vector store providers.

MemoryVectorStore scores a query against every persisted event vector with
numpy; it is rebuilt from the embeddings file on every process start.
"""

from eventfinder.providers.vector_store.memory_vector_store import (
    MemoryVectorStore,
    load_embedding_map,
)

__all__ = ["MemoryVectorStore", "load_embedding_map"]
