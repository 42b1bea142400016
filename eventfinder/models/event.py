"""Pydantic v2 model for a single event row.

Field names follow the dataset's column names (``event_name``,
``price_cents``, ...) because the same JSON is served to the front end.
Columns the service does not know about are kept as extra fields so they
survive the round trip.  Instances are frozen: the event store hands out
the same objects to every request and nothing may mutate them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventfinder.utils.text import format_price_label


class Event(BaseModel):
    """One event from the source dataset."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = Field(description='Synthetic id "{row_index}-{event_name}".')
    event_name: str = ""
    event_url: str = ""
    event_summary: str = ""
    event_description: str = ""
    event_category: str = ""
    presented_by_name: str = ""
    full_address: str = ""
    region: str = ""
    price_cents: int = Field(default=0, ge=0, description="Ticket price; 0 means free.")
    start_date: str = ""
    start_time: str = ""
    end_date: str = ""
    end_time: str = ""
    start_datetime_utc: str | None = Field(
        default=None, description="Start instant, local time read as IST (+05:30)."
    )
    end_datetime_utc: str | None = None

    @field_validator(
        "event_name",
        "event_url",
        "event_summary",
        "event_description",
        "event_category",
        "presented_by_name",
        "full_address",
        "region",
        "start_date",
        "start_time",
        "end_date",
        "end_time",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("price_cents", mode="before")
    @classmethod
    def _normalise_price(cls, value: Any) -> int:
        """Blank, missing, non-numeric and negative prices all become 0 (free)."""
        if value is None or isinstance(value, bool):
            return 0
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return 0
        try:
            cents = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return 0
        return max(cents, 0)

    @property
    def is_free(self) -> bool:
        return self.price_cents <= 0

    @property
    def price_label(self) -> str:
        return format_price_label(self.price_cents)

    def search_text(self) -> str:
        """Lowercased text the lexical ranker and embeddings are built from."""
        return " ".join(
            (
                self.event_name,
                self.event_summary,
                self.event_category,
                self.price_label,
                self.event_description,
            )
        ).lower()
