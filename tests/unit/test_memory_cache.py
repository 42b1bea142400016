"""Unit tests for MemoryCacheProvider."""

from __future__ import annotations

import pytest

from eventfinder.providers.cache.memory_cache import MemoryCacheProvider


class TestMemoryCacheProvider:
    @pytest.fixture()
    def cache(self) -> MemoryCacheProvider:
        return MemoryCacheProvider(max_size=100)

    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self, cache: MemoryCacheProvider) -> None:
        assert await cache.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache: MemoryCacheProvider) -> None:
        await cache.set("free ai", ("a", "b"))
        assert await cache.get("free ai") == ("a", "b")

    @pytest.mark.asyncio
    async def test_empty_result_is_a_hit(self, cache: MemoryCacheProvider) -> None:
        await cache.set("nothing matches", ())
        assert await cache.get("nothing matches") == ()

    @pytest.mark.asyncio
    async def test_keys_are_exact_strings(self, cache: MemoryCacheProvider) -> None:
        await cache.set("Free AI", ("a",))
        assert await cache.get("free ai") is None
        assert await cache.get("Free AI ") is None

    @pytest.mark.asyncio
    async def test_set_overwrites_existing(self, cache: MemoryCacheProvider) -> None:
        await cache.set("key1", "old")
        await cache.set("key1", "new")
        assert await cache.get("key1") == "new"
        assert cache.size() == 1

    @pytest.mark.asyncio
    async def test_delete_removes_key(self, cache: MemoryCacheProvider) -> None:
        await cache.set("key1", "value1")
        await cache.delete("key1")
        assert await cache.exists("key1") is False

    @pytest.mark.asyncio
    async def test_delete_nonexistent_is_noop(self, cache: MemoryCacheProvider) -> None:
        await cache.delete("nonexistent")

    @pytest.mark.asyncio
    async def test_101st_insert_evicts_first(self, cache: MemoryCacheProvider) -> None:
        for i in range(101):
            await cache.set(f"q{i}", i)

        assert cache.size() == 100
        assert await cache.get("q0") is None
        assert await cache.get("q1") == 1
        assert await cache.get("q100") == 100

    @pytest.mark.asyncio
    async def test_reads_do_not_refresh_position(self) -> None:
        cache = MemoryCacheProvider(max_size=2)
        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.get("a")
        await cache.set("c", 3)

        assert await cache.exists("a") is False
        assert await cache.exists("b") is True
        assert await cache.exists("c") is True

    def test_max_size_property(self) -> None:
        assert MemoryCacheProvider(max_size=7).max_size == 7
