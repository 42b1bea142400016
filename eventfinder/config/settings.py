"""Application settings loaded from environment variables via pydantic-settings.

Two sources, in priority order:

  1. Environment variables, e.g. ``OPENAI_API_KEY=sk-abc123``
  2. A ``.env`` file in the working directory (local development)

Field ``openai_api_key`` maps to env var ``OPENAI_API_KEY``.  Defaults apply
when neither source sets a value.  An empty credential means "not
configured": the matching capability (AI query parsing or semantic search)
is switched off instead of failing requests.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """eventfinder application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === LLM / embedding providers ===
    openai_api_key: str = ""
    openai_base_url: str = ""  # OpenAI-compatible endpoint (Gemini, TogetherAI, ...)
    openai_text_model: str = ""
    openai_embedding_model: str = ""
    anthropic_api_key: str = ""
    anthropic_model: str = ""

    # === Dataset ===
    events_csv_path: str = "data/dataBase.csv"
    embeddings_path: str = "data/embeddings.json"

    # === Search tuning ===
    search_cache_size: int = 100
    search_semantic_top_k: int = 50
    search_min_semantic_results: int = 5
    # 0 disables the deadline on LLM parsing and embedding calls.
    search_external_timeout_seconds: float = 0.0
    search_ai_parsing_enabled: bool = True
    search_semantic_enabled: bool = True

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 3001
    app_env: str = "development"
    log_level: str = "INFO"
    log_to_stderr: bool = False
    cors_allowed_origins: str = "*"

    def get_available_llm_providers(self) -> list[str]:
        """Return LLM provider names that have non-empty API keys configured."""
        providers: list[str] = []
        if self.anthropic_api_key:
            providers.append("anthropic")
        if self.openai_api_key:
            providers.append("openai")
        return providers

    def get_cors_origins(self) -> list[str]:
        """Split the comma-separated ``CORS_ALLOWED_ORIGINS`` value."""
        origins = [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]
        return origins or ["*"]
