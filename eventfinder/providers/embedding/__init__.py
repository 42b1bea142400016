"""Embedding provider implementations.

Only the query is embedded at request time; event vectors come from the
persisted embeddings file produced offline with the same model.
"""

from eventfinder.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider

__all__ = ["OpenAIEmbeddingProvider"]
