"""Abstract base class for search-result cache providers.

The search service caches final result lists keyed by the raw query
string.  Implementations may use an in-process dict or a shared store;
either way they are bounded and evict on their own.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    Operations are async so a network-backed store can be swapped in
    without blocking the event loop.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value stored under *key*, or ``None`` when absent."""

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, evicting per the provider's policy."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove *key*; no-op if it does not exist."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present."""

    @abstractmethod
    def size(self) -> int:
        """Return the number of entries currently held."""
