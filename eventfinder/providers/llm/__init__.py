"""LLM provider implementations.

Both adapters implement ILLMProvider and are selected in main.py by which
API key is configured (Anthropic first, then OpenAI-compatible).  With no
key at all the query interpreter runs on its keyword heuristics only.
"""

from eventfinder.providers.llm.anthropic_provider import AnthropicLLMProvider
from eventfinder.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["AnthropicLLMProvider", "OpenAILLMProvider"]
