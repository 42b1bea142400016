"""Unit tests for configuration: keyword tables, YAML loader and Settings helpers."""

from __future__ import annotations

from pathlib import Path

from eventfinder.config.domain_knowledge import (
    CATEGORY_KEYWORDS,
    category_keywords_from_config,
)
from eventfinder.config.loader import load_config
from eventfinder.config.settings import Settings


class TestCategoryKeywords:
    def test_specific_keywords_before_broad_ones(self) -> None:
        keywords = [kw for kw, _ in CATEGORY_KEYWORDS]
        assert keywords.index("hackathon") < keywords.index("tech")
        assert keywords.index("ai") < keywords.index("technology")

    def test_defaults_when_config_silent(self) -> None:
        assert category_keywords_from_config({}) is CATEGORY_KEYWORDS
        assert category_keywords_from_config({"query_parser": None}) is CATEGORY_KEYWORDS

    def test_mapping_entries_keep_order(self) -> None:
        config = {
            "query_parser": {
                "category_keywords": [{"Jazz": "Music"}, {"yoga": "Wellness"}, ["gig", "Music"]]
            }
        }
        assert category_keywords_from_config(config) == (
            ("jazz", "Music"),
            ("yoga", "Wellness"),
            ("gig", "Music"),
        )

    def test_unusable_entries_fall_back_to_defaults(self) -> None:
        config = {"query_parser": {"category_keywords": ["nonsense", 42]}}
        assert category_keywords_from_config(config) is CATEGORY_KEYWORDS


class TestLoadConfig:
    def test_yaml_merged_with_settings(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "app:\n  name: eventfinder\n  port: 1\nsearch:\n  extra: kept\n",
            encoding="utf-8",
        )
        config = load_config(str(path), settings=Settings(app_port=4000, app_env="test"))

        assert config["app"]["name"] == "eventfinder"
        assert config["app"]["port"] == 4000
        assert config["app"]["env"] == "test"
        assert config["search"] == {"extra": "kept"}

    def test_missing_file_uses_settings_only(self, tmp_path: Path) -> None:
        settings = Settings(app_host="127.0.0.1", app_port=8080, app_env="production")
        config = load_config(str(tmp_path / "absent.yaml"), settings=settings)
        assert config == {"app": {"host": "127.0.0.1", "port": 8080, "env": "production"}}

    def test_repo_config_lists_categories(self, project_root: Path) -> None:
        config = load_config(str(project_root / "config" / "config.yaml"), settings=Settings())
        table = category_keywords_from_config(config)
        assert table == CATEGORY_KEYWORDS


class TestSettings:
    def test_available_providers_order(self) -> None:
        settings = Settings(openai_api_key="sk", anthropic_api_key="ak")
        assert settings.get_available_llm_providers() == ["anthropic", "openai"]
        assert Settings(openai_api_key="", anthropic_api_key="").get_available_llm_providers() == []

    def test_cors_origins(self) -> None:
        assert Settings(cors_allowed_origins="*").get_cors_origins() == ["*"]
        assert Settings(cors_allowed_origins=" ").get_cors_origins() == ["*"]
        assert Settings(
            cors_allowed_origins="http://a.test, http://b.test"
        ).get_cors_origins() == ["http://a.test", "http://b.test"]
