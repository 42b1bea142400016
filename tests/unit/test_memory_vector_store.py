"""Unit tests for MemoryVectorStore and the embeddings file loader."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from eventfinder.interfaces.embedding_provider import IEmbeddingProvider
from eventfinder.providers.vector_store.memory_vector_store import (
    MemoryVectorStore,
    load_embedding_map,
)
from eventfinder.utils.errors import ConfigurationError, RAGError

_VECTORS = {
    "0-Hackathon": [1.0, 0.0, 0.0],
    "1-Workshop": [0.0, 1.0, 0.0],
    "2-Meetup": [0.7, 0.7, 0.0],
    "3-Stale": [0.0, 0.0, 1.0],
}


@pytest.fixture()
def embedder() -> MagicMock:
    provider = MagicMock(spec=IEmbeddingProvider)
    provider.embed_single = AsyncMock(return_value=[1.0, 0.1, 0.0])
    provider.is_available.return_value = True
    provider.get_provider_name.return_value = "mock_embedding"
    return provider


class TestMemoryVectorStore:
    @pytest.mark.asyncio
    async def test_results_ordered_by_cosine_similarity(self, embedder: MagicMock) -> None:
        store = MemoryVectorStore(embedder, _VECTORS)
        matches = await store.query("hackathon", top_k=3)

        assert [m.event_id for m in matches] == ["0-Hackathon", "2-Meetup", "1-Workshop"]
        assert matches[0].score == pytest.approx(0.995, abs=1e-3)
        embedder.embed_single.assert_awaited_once_with("hackathon")

    @pytest.mark.asyncio
    async def test_top_k_caps_results(self, embedder: MagicMock) -> None:
        store = MemoryVectorStore(embedder, _VECTORS)
        assert len(await store.query("x", top_k=2)) == 2
        assert len(await store.query("x", top_k=50)) == 4

    @pytest.mark.asyncio
    async def test_event_ids_filter_and_order(self, embedder: MagicMock) -> None:
        store = MemoryVectorStore(embedder, _VECTORS, event_ids=["1-Workshop", "0-Hackathon", "9-New"])
        assert store.count() == 2
        matches = await store.query("x", top_k=10)
        assert {m.event_id for m in matches} == {"0-Hackathon", "1-Workshop"}

    def test_mismatched_dimensions_skipped(self, embedder: MagicMock) -> None:
        store = MemoryVectorStore(embedder, {"a": [1.0, 0.0], "b": [1.0, 0.0, 0.0]})
        assert store.count() == 1

    @pytest.mark.asyncio
    async def test_query_dimension_mismatch_raises(self, embedder: MagicMock) -> None:
        embedder.embed_single.return_value = [1.0, 0.0]
        store = MemoryVectorStore(embedder, _VECTORS)
        with pytest.raises(RAGError):
            await store.query("x")

    @pytest.mark.asyncio
    async def test_empty_store(self, embedder: MagicMock) -> None:
        store = MemoryVectorStore(embedder, {})
        assert await store.query("x") == []
        assert store.is_available() is False
        embedder.embed_single.assert_not_called()

    def test_unavailable_without_embedder(self, embedder: MagicMock) -> None:
        embedder.is_available.return_value = False
        assert MemoryVectorStore(embedder, _VECTORS).is_available() is False

    def test_from_file(self, tmp_path: Path, embedder: MagicMock) -> None:
        path = tmp_path / "embeddings.json"
        path.write_text(json.dumps(_VECTORS), encoding="utf-8")
        store = MemoryVectorStore.from_file(path, embedder, event_ids=["0-Hackathon"])
        assert store.count() == 1


class TestLoadEmbeddingMap:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            load_embedding_map(tmp_path / "nope.json")

    def test_not_an_object(self, tmp_path: Path) -> None:
        path = tmp_path / "embeddings.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_embedding_map(path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "embeddings.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_embedding_map(path)
