"""Public interface definitions for all external collaborators.

Every external API or data source is reached through an abstract base class
from this package.  Concrete adapters live in ``eventfinder/providers/`` and
are wired together in ``eventfinder/main.py``; unit tests inject fakes.

    Interface                  ->  Concrete implementations
    -----------------------------------------------------------------
    ILLMProvider               ->  AnthropicLLMProvider, OpenAILLMProvider
    IEmbeddingProvider         ->  OpenAIEmbeddingProvider
    IVectorStoreProvider       ->  MemoryVectorStore
    ICacheProvider             ->  MemoryCacheProvider
    IEventSource               ->  CSVEventSource
"""

from eventfinder.interfaces.cache_provider import ICacheProvider
from eventfinder.interfaces.embedding_provider import IEmbeddingProvider
from eventfinder.interfaces.event_source import IEventSource
from eventfinder.interfaces.llm_provider import ILLMProvider
from eventfinder.interfaces.vector_store_provider import IVectorStoreProvider, VectorMatch

__all__ = [
    "ICacheProvider",
    "IEmbeddingProvider",
    "IEventSource",
    "ILLMProvider",
    "IVectorStoreProvider",
    "VectorMatch",
]
