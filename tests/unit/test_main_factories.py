"""Unit tests for factory functions in eventfinder/main.py.

Tests the LLM provider priority, embedding provider selection and the
build_search_service assembly with mocked external dependencies, so no
real network calls or API keys are required.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from eventfinder.config.settings import Settings


# ======================================================================
# Shared helpers
# ======================================================================


def _settings(**overrides) -> Settings:
    """Build a Settings instance with every key empty unless overridden."""
    defaults = {
        "openai_api_key": "",
        "openai_base_url": "",
        "openai_text_model": "",
        "openai_embedding_model": "",
        "anthropic_api_key": "",
        "anthropic_model": "",
        "app_env": "test",
    }
    defaults.update(overrides)
    return Settings(**defaults)


# ======================================================================
# _build_llm_provider
# ======================================================================


class TestBuildLLMProvider:
    """Provider priority: Anthropic first, then OpenAI-compatible."""

    def test_anthropic_priority(self) -> None:
        from eventfinder.main import _build_llm_provider
        from eventfinder.providers.llm.anthropic_provider import AnthropicLLMProvider

        s = _settings(anthropic_api_key="test-anthropic-key", openai_api_key="sk-also-set")
        assert isinstance(_build_llm_provider(s), AnthropicLLMProvider)

    def test_openai_fallback(self) -> None:
        from eventfinder.main import _build_llm_provider
        from eventfinder.providers.llm.openai_provider import OpenAILLMProvider

        s = _settings(openai_api_key="sk-test")
        assert isinstance(_build_llm_provider(s), OpenAILLMProvider)

    def test_none_without_keys(self) -> None:
        from eventfinder.main import _build_llm_provider

        assert _build_llm_provider(_settings()) is None

    def test_none_when_disabled(self) -> None:
        from eventfinder.main import _build_llm_provider

        s = _settings(anthropic_api_key="key", search_ai_parsing_enabled=False)
        assert _build_llm_provider(s) is None


# ======================================================================
# _build_embedding_provider
# ======================================================================


class TestBuildEmbeddingProvider:
    def test_openai_embedder_with_key(self) -> None:
        from eventfinder.main import _build_embedding_provider
        from eventfinder.providers.embedding.openai_embedding_provider import (
            OpenAIEmbeddingProvider,
        )

        result = _build_embedding_provider(_settings(openai_api_key="sk-test"))
        assert isinstance(result, OpenAIEmbeddingProvider)

    def test_anthropic_key_alone_gives_no_embedder(self) -> None:
        from eventfinder.main import _build_embedding_provider

        assert _build_embedding_provider(_settings(anthropic_api_key="key")) is None

    def test_disabled(self) -> None:
        from eventfinder.main import _build_embedding_provider

        s = _settings(openai_api_key="sk-test", search_semantic_enabled=False)
        assert _build_embedding_provider(s) is None


# ======================================================================
# build_search_service
# ======================================================================


class TestBuildSearchService:
    def test_heuristic_only_without_keys(self, tmp_path: Path) -> None:
        from eventfinder.main import build_search_service
        from eventfinder.services.query_interpreter import HeuristicQueryStrategy

        service = build_search_service(
            _settings(events_csv_path=str(tmp_path / "events.csv"))
        )
        strategies = service.interpreter.strategies
        assert len(strategies) == 1
        assert isinstance(strategies[0], HeuristicQueryStrategy)
        assert service.health()["ai_query_parsing"] is False

    def test_llm_strategy_first_when_key_set(self, tmp_path: Path) -> None:
        from eventfinder.main import build_search_service
        from eventfinder.services.query_interpreter import (
            HeuristicQueryStrategy,
            LLMQueryStrategy,
        )

        service = build_search_service(
            _settings(
                anthropic_api_key="key",
                events_csv_path=str(tmp_path / "events.csv"),
            )
        )
        strategies = service.interpreter.strategies
        assert isinstance(strategies[0], LLMQueryStrategy)
        assert isinstance(strategies[-1], HeuristicQueryStrategy)

    def test_category_table_from_config(self) -> None:
        from eventfinder.main import build_search_service

        config = {"query_parser": {"category_keywords": [{"jazz": "Music"}]}}
        service = build_search_service(_settings(), config)
        heuristic = service.interpreter.strategies[-1]
        parsed = heuristic.parse_sync("jazz nights")
        assert parsed.filters.category == "Music"
        assert parsed.semantic_query == "nights"

    @pytest.mark.asyncio
    async def test_retriever_built_from_embeddings_file(self, tmp_path: Path) -> None:
        from eventfinder.main import build_search_service

        csv_path = tmp_path / "events.csv"
        csv_path.write_text(
            "event_name,event_category,price_cents\n"
            "Robot Fair,Tech & AI,0\n"
            "Book Club,Education & Research,0\n",
            encoding="utf-8",
        )
        embeddings_path = tmp_path / "embeddings.json"
        embeddings_path.write_text(
            json.dumps({"0-Robot Fair": [1.0, 0.0], "1-Book Club": [0.0, 1.0]}),
            encoding="utf-8",
        )

        mock_client = AsyncMock()
        mock_client.embeddings.create = AsyncMock(
            return_value=MagicMock(data=[MagicMock(embedding=[0.9, 0.1])], usage=None)
        )
        with patch(
            "eventfinder.providers.embedding.openai_embedding_provider.openai.AsyncOpenAI",
            return_value=mock_client,
        ):
            service = build_search_service(
                _settings(
                    openai_api_key="sk-test",
                    search_ai_parsing_enabled=False,
                    events_csv_path=str(csv_path),
                    embeddings_path=str(embeddings_path),
                )
            )
            state = await service.initialize()

        assert state.retriever is not None
        assert state.retriever.count() == 2
        assert service.health()["semantic_search"] is True

    @pytest.mark.asyncio
    async def test_missing_embeddings_file_disables_semantic_search(
        self, tmp_path: Path
    ) -> None:
        from eventfinder.main import build_search_service

        csv_path = tmp_path / "events.csv"
        csv_path.write_text("event_name\nRobot Fair\n", encoding="utf-8")

        with patch("eventfinder.providers.embedding.openai_embedding_provider.openai.AsyncOpenAI"):
            service = build_search_service(
                _settings(
                    openai_api_key="sk-test",
                    events_csv_path=str(csv_path),
                    embeddings_path=str(tmp_path / "missing.json"),
                )
            )
            state = await service.initialize()

        assert state.retriever is None
        assert len(state.store) == 1


# ======================================================================
# create_app
# ======================================================================


class TestCreateApp:
    def test_routes_registered(self) -> None:
        from eventfinder.main import create_app

        app = create_app()
        paths = {route.path for route in app.routes}
        for path in ("/events", "/api/events", "/search", "/api/search", "/api/health"):
            assert path in paths
