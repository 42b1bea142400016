"""Cache providers.

MemoryCacheProvider is an in-process FIFO cache built on cachetools; it is
not shared across worker processes.
"""

from eventfinder.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
