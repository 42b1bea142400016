"""Turns a raw search string into a semantic query plus structured filters.

Architecture: ordered strategy chain
-------------------------------------
The interpreter holds a list of strategies with one uniform contract,
``async parse(raw, categories) -> ParsedQuery | None``, where ``None``
means "this strategy could not produce an answer".  Strategies are tried in
order and the first non-``None`` result wins:

  - **LLMQueryStrategy** asks the configured LLM to return
    ``{"semanticQuery": ..., "filters": {"cost": ..., "category": ...}}``.
    Provider errors, timeouts, unparseable JSON and values that fail
    validation all yield ``None``.
  - **HeuristicQueryStrategy** is always last and never fails.  It looks
    for cost keywords ("free", "paid", "$") and the first category keyword
    from an ordered table, then strips those words from the query.

Both strategies go through the same pydantic models, so a literal
``"null"`` from either ends up as a real ``None``.
"""

from __future__ import annotations

import asyncio
import json
import re
from abc import ABC, abstractmethod
from typing import Any, Sequence

from pydantic import ValidationError

from eventfinder.config.domain_knowledge import (
    CATEGORY_KEYWORDS,
    FREE_KEYWORDS,
    PAID_KEYWORDS,
)
from eventfinder.interfaces.llm_provider import ILLMProvider
from eventfinder.models.search import CostFilter, ParsedQuery, SearchFilters
from eventfinder.utils.concurrency import with_optional_timeout
from eventfinder.utils.errors import LLMError, SearchError
from eventfinder.utils.logging import get_logger
from eventfinder.utils.text import collapse_whitespace, remove_keyword

# Matches markdown code fences (```json ... ``` or ``` ... ```) that LLMs
# wrap around JSON output despite being asked not to.
_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?\s*```", re.DOTALL)


class QueryStrategy(ABC):
    """One way of interpreting a raw query."""

    name: str = "strategy"

    @abstractmethod
    async def parse(self, raw: str, categories: Sequence[str]) -> ParsedQuery | None:
        """Return the interpretation, or ``None`` if this strategy cannot answer."""


class LLMQueryStrategy(QueryStrategy):
    """Delegates query parsing to an LLM provider.

    Parameters
    ----------
    llm_provider:
        Any :class:`ILLMProvider`; skipped when it reports unavailable.
    timeout:
        Seconds to wait for the completion; ``0`` waits indefinitely.
    """

    name = "llm"

    def __init__(self, llm_provider: ILLMProvider, timeout: float = 0.0) -> None:
        self._llm = llm_provider
        self._timeout = timeout
        self._logger = get_logger(__name__)

    async def parse(self, raw: str, categories: Sequence[str]) -> ParsedQuery | None:
        if not self._llm.is_available():
            return None

        provider_name = self._llm.get_provider_name()
        try:
            response = await with_optional_timeout(
                self._llm.complete(
                    system_prompt=self._system_prompt(),
                    user_prompt=self._build_prompt(raw, categories),
                    temperature=0.0,
                    max_tokens=300,
                ),
                self._timeout,
            )
        except (LLMError, asyncio.TimeoutError) as exc:
            self._logger.warning(
                "llm_query_parse_failed", provider=provider_name, reason=str(exc) or type(exc).__name__
            )
            return None

        try:
            data = self._parse_llm_response(response)
            parsed = ParsedQuery.model_validate(
                {
                    "semanticQuery": data.get("semanticQuery"),
                    "filters": data.get("filters"),
                    "strategy": self.name,
                }
            )
        except (json.JSONDecodeError, ValidationError, ValueError) as exc:
            self._logger.warning(
                "llm_query_parse_failed",
                provider=provider_name,
                reason=str(exc),
                response_preview=response[:200],
            )
            return None

        self._logger.debug("llm_query_parsed", provider=provider_name, query=raw)
        return parsed

    @staticmethod
    def _system_prompt() -> str:
        return (
            "You convert search requests for an events website into JSON. "
            "Reply with a single JSON object and nothing else."
        )

    @staticmethod
    def _build_prompt(raw: str, categories: Sequence[str]) -> str:
        category_list = ", ".join(categories) if categories else "(no categories known)"
        return f"""Split the user's event search into a semantic search phrase and filters.

Filters:
- "cost": "free" or "paid", or null when the user does not mention price.
- "category": one of [{category_list}], or null when no category is implied.
Everything else the user asked for goes into "semanticQuery".

Examples:
"are there any free hackathons?" ->
{{"semanticQuery": "hackathons", "filters": {{"cost": "free", "category": "Hackathon"}}}}
"find me workshops about AI" ->
{{"semanticQuery": "workshops about AI", "filters": {{"cost": null, "category": "Workshop"}}}}

User query: "{raw}"
"""

    @staticmethod
    def _parse_llm_response(response: str) -> dict[str, Any]:
        """Extract a JSON object from an LLM reply.

        Raises
        ------
        json.JSONDecodeError
            If no valid JSON can be extracted.
        ValueError
            If the JSON is not an object.
        """
        text = response.strip()

        fence_match = _JSON_FENCE_RE.search(text)
        if fence_match:
            text = fence_match.group(1).strip()

        # Fall back to the outermost braces when prose surrounds the object.
        if not text.startswith("{"):
            start = text.find("{")
            end = text.rfind("}")
            if start != -1 and end > start:
                text = text[start : end + 1]

        parsed = json.loads(text)
        if not isinstance(parsed, dict):
            raise ValueError(f"expected a JSON object, got {type(parsed).__name__}")
        return parsed


class HeuristicQueryStrategy(QueryStrategy):
    """Keyword-table parser used when no LLM answer is available."""

    name = "heuristic"

    def __init__(
        self,
        category_keywords: Sequence[tuple[str, str]] = CATEGORY_KEYWORDS,
        free_keywords: Sequence[str] = FREE_KEYWORDS,
        paid_keywords: Sequence[str] = PAID_KEYWORDS,
    ) -> None:
        self._category_keywords = tuple(category_keywords)
        self._free_keywords = tuple(free_keywords)
        self._paid_keywords = tuple(paid_keywords)

    async def parse(self, raw: str, categories: Sequence[str]) -> ParsedQuery:
        return self.parse_sync(raw)

    def parse_sync(self, raw: str) -> ParsedQuery:
        lowered = raw.lower().strip()

        cost: CostFilter | None = None
        removed: tuple[str, ...] = ()
        if any(keyword in lowered for keyword in self._free_keywords):
            cost = CostFilter.FREE
            removed = self._free_keywords
        elif any(keyword in lowered for keyword in self._paid_keywords):
            cost = CostFilter.PAID
            removed = self._paid_keywords

        category: str | None = None
        for keyword, label in self._category_keywords:
            if keyword in lowered:
                category = label
                break

        semantic = raw
        for keyword in removed:
            semantic = remove_keyword(semantic, keyword)
        if category is not None:
            for keyword, _ in self._category_keywords:
                semantic = remove_keyword(semantic, keyword)

        return ParsedQuery(
            semantic_query=collapse_whitespace(semantic),
            filters=SearchFilters(cost=cost, category=category),
            strategy=self.name,
        )


class QueryInterpreter:
    """Runs strategies in order; the heuristic always closes the chain."""

    def __init__(self, strategies: Sequence[QueryStrategy] = ()) -> None:
        chain = list(strategies)
        if not chain or not isinstance(chain[-1], HeuristicQueryStrategy):
            chain.append(HeuristicQueryStrategy())
        self._strategies = tuple(chain)
        self._logger = get_logger(__name__)

    @property
    def strategies(self) -> tuple[QueryStrategy, ...]:
        return self._strategies

    def has_llm(self) -> bool:
        return any(isinstance(s, LLMQueryStrategy) for s in self._strategies)

    async def interpret(self, raw: str, categories: Sequence[str] = ()) -> ParsedQuery:
        for strategy in self._strategies:
            parsed = await strategy.parse(raw, categories)
            if parsed is not None:
                self._logger.info(
                    "query_interpreted",
                    strategy=strategy.name,
                    semantic_query=parsed.semantic_query,
                    filters=parsed.filters.model_dump(mode="json", exclude_none=True),
                )
                return parsed
        raise SearchError(message=f"No strategy could interpret query: {raw!r}")
