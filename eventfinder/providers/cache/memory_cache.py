"""In-memory cache provider using cachetools.FIFOCache.

Eviction is by insertion order: once ``max_size`` entries are held, storing
a new key drops the oldest inserted key.  Reads do not refresh an entry's
position (this is not an LRU) and entries never expire; the cache lives as
long as the process.
"""

from __future__ import annotations

from typing import Any

import structlog
from cachetools import FIFOCache

from eventfinder.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheProvider(ICacheProvider):
    """Bounded FIFO cache backed by ``cachetools.FIFOCache``.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the oldest is evicted.
    """

    def __init__(self, max_size: int = 100) -> None:
        self._max_size = max_size
        self._cache: FIFOCache[str, Any] = FIFOCache(maxsize=max_size)

    @property
    def max_size(self) -> int:
        return self._max_size

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        """Return the cached value for *key*, or ``None`` if missing."""
        value = self._cache.get(key)
        if value is not None:
            logger.debug("cache_hit", key=key)
        else:
            logger.debug("cache_miss", key=key)
        return value

    async def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, evicting the oldest entry when full."""
        if key not in self._cache and len(self._cache) >= self._max_size:
            logger.debug("cache_evict", size=len(self._cache))
        self._cache[key] = value
        logger.debug("cache_set", key=key)

    async def delete(self, key: str) -> None:
        """Remove *key* from the cache (no-op if absent)."""
        self._cache.pop(key, None)
        logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        return key in self._cache

    def size(self) -> int:
        return len(self._cache)
