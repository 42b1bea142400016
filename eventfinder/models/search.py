"""Pydantic v2 models for structured search filters and parsed queries.

All models are frozen.  Filter values coming from an LLM or from a request
body are normalised on the way in: empty strings and the literal string
``"null"`` become real ``None``.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventfinder.utils.text import parse_event_date


def _none_if_nullish(value: Any) -> Any:
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped or stripped.lower() == "null":
            return None
        return stripped
    return value


class CostFilter(str, Enum):
    """Price bucket requested by the user."""

    FREE = "free"
    PAID = "paid"


class TimeOfDay(str, Enum):
    """Start-time buckets offered by the front end's time-of-day picker."""

    BEFORE_6 = "before6"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    AFTER_6 = "after6"

    @property
    def minute_range(self) -> tuple[int, int]:
        """Half-open ``[start, end)`` range in minutes since midnight."""
        return _TIME_OF_DAY_RANGES[self]

    def contains(self, minutes: int) -> bool:
        start, end = self.minute_range
        return start <= minutes < end


_TIME_OF_DAY_RANGES: dict[TimeOfDay, tuple[int, int]] = {
    TimeOfDay.BEFORE_6: (0, 6 * 60),
    TimeOfDay.MORNING: (6 * 60, 12 * 60),
    TimeOfDay.AFTERNOON: (12 * 60, 18 * 60),
    TimeOfDay.AFTER_6: (18 * 60, 24 * 60),
}


class SearchFilters(BaseModel):
    """Structured filters applied before ranking.  ``None`` means "any"."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cost: CostFilter | None = None
    category: str | None = None
    start_date: date | None = Field(default=None, alias="startDate")
    end_date: date | None = Field(default=None, alias="endDate")
    time_of_day: TimeOfDay | None = Field(default=None, alias="timeOfDay")
    location: str | None = None

    @field_validator("cost", "category", "time_of_day", "location", mode="before")
    @classmethod
    def _normalise_nullish(cls, value: Any) -> Any:
        value = _none_if_nullish(value)
        if isinstance(value, str) and value.lower() in ("free", "paid"):
            return value.lower()
        return value

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_bound(cls, value: Any) -> Any:
        value = _none_if_nullish(value)
        if value is None or isinstance(value, date):
            return value
        parsed = parse_event_date(value)
        if parsed is None:
            raise ValueError(f"unrecognised date: {value!r}")
        return parsed

    def is_empty(self) -> bool:
        """Return ``True`` when no filter value is set."""
        return all(value is None for value in self.model_dump().values())

    def merged_with(self, overrides: SearchFilters | None) -> SearchFilters:
        """Return a copy where every non-null field of *overrides* wins."""
        if overrides is None:
            return self
        update = {k: v for k, v in overrides.model_dump().items() if v is not None}
        return self.model_copy(update=update)


class ParsedQuery(BaseModel):
    """Result of query interpretation: free text to rank by plus filters."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    semantic_query: str = Field(default="", alias="semanticQuery")
    filters: SearchFilters = Field(default_factory=SearchFilters)
    strategy: str = Field(default="", description="Interpreter strategy that produced this.")

    @field_validator("semantic_query", mode="before")
    @classmethod
    def _coerce_query(cls, value: Any) -> str:
        value = _none_if_nullish(value)
        return "" if value is None else str(value).strip()

    @field_validator("filters", mode="before")
    @classmethod
    def _coerce_filters(cls, value: Any) -> Any:
        return {} if value is None else value
