"""Anthropic LLM provider adapter.

Wraps the ``anthropic`` async client to implement :class:`ILLMProvider`
via the Messages API.  Unlike the OpenAI adapter, the system prompt is a
top-level parameter and the response is a list of content blocks, of which
only the text blocks are kept.
"""

from __future__ import annotations

import anthropic
import httpx
import structlog

from eventfinder.config.settings import Settings
from eventfinder.interfaces.llm_provider import ILLMProvider
from eventfinder.utils.errors import LLMError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_MODEL = "claude-3-5-haiku-latest"


class AnthropicLLMProvider(ILLMProvider):
    """LLM provider backed by the Anthropic Messages API.

    Defaults to a small, fast model; query parsing needs a short JSON
    answer, not long-form reasoning.  Override with ``ANTHROPIC_MODEL``.
    """

    def __init__(
        self, settings: Settings, http_client: httpx.AsyncClient | None = None
    ) -> None:
        self._settings = settings
        self._api_key = settings.anthropic_api_key
        client_kwargs: dict = {"api_key": self._api_key}
        if http_client is not None:
            client_kwargs["http_client"] = http_client
        self._client = anthropic.AsyncAnthropic(**client_kwargs)
        self._model = settings.anthropic_model or _DEFAULT_MODEL

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.0,
        max_tokens: int = 500,
    ) -> str:
        """Generate a text completion via the Anthropic Messages API."""
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=max_tokens,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                temperature=temperature,
            )
        except anthropic.APIError as exc:
            raise LLMError(
                message=f"Anthropic API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        text_blocks = [block.text for block in response.content if block.type == "text"]
        if not text_blocks:
            raise LLMError(
                message="Anthropic returned no text content",
                provider_name=self.get_provider_name(),
            )
        logger.info(
            "anthropic_completion",
            model=self._model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )
        return "\n".join(text_blocks)

    def is_available(self) -> bool:
        return bool(self._api_key)

    def get_provider_name(self) -> str:
        return "anthropic"
