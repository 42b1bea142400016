"""Unit tests for the Event and search filter models."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from eventfinder.models.event import Event
from eventfinder.models.search import CostFilter, ParsedQuery, SearchFilters, TimeOfDay


class TestEvent:
    @pytest.mark.parametrize(
        "raw", ["", None, "   ", "abc", -500, True, "inf", "-inf", "1e400", "nan", float("inf")]
    )
    def test_bad_prices_become_zero(self, raw: object) -> None:
        event = Event(id="0-x", price_cents=raw)
        assert event.price_cents == 0
        assert event.is_free

    @pytest.mark.parametrize(("raw", "expected"), [("1500", 1500), (" 250 ", 250), ("99.0", 99), (42, 42)])
    def test_numeric_prices_kept(self, raw: object, expected: int) -> None:
        assert Event(id="0-x", price_cents=raw).price_cents == expected

    def test_price_label(self) -> None:
        assert Event(id="0-x", price_cents=0).price_label == "Free"
        assert Event(id="0-x", price_cents=2599).price_label == "$25.99"

    def test_text_fields_trimmed_and_none_is_empty(self) -> None:
        event = Event(id="0-x", event_name="  Demo Day ", event_summary=None)
        assert event.event_name == "Demo Day"
        assert event.event_summary == ""

    def test_frozen(self) -> None:
        event = Event(id="0-x", event_name="A")
        with pytest.raises(ValidationError):
            event.event_name = "B"

    def test_unknown_columns_preserved(self) -> None:
        event = Event(id="0-x", event_name="A", organiser_email="a@example.com")
        assert event.model_dump()["organiser_email"] == "a@example.com"

    def test_search_text_field_order(self) -> None:
        event = Event(
            id="0-x",
            event_name="Name",
            event_summary="Summary",
            event_category="Cat",
            price_cents=100,
            event_description="Desc",
        )
        assert event.search_text() == "name summary cat $1.00 desc"


class TestSearchFilters:
    def test_null_strings_become_none(self) -> None:
        filters = SearchFilters(cost="null", category="Null", location="", timeOfDay=" ")
        assert filters.is_empty()

    def test_cost_case_insensitive(self) -> None:
        assert SearchFilters(cost="FREE").cost is CostFilter.FREE

    def test_aliases_and_field_names(self) -> None:
        by_alias = SearchFilters.model_validate(
            {"startDate": "2024-05-01", "endDate": "5/31/2024", "timeOfDay": "morning"}
        )
        by_name = SearchFilters(start_date=date(2024, 5, 1), end_date=date(2024, 5, 31), time_of_day="morning")
        assert by_alias == by_name
        assert by_alias.time_of_day is TimeOfDay.MORNING

    def test_bad_date_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SearchFilters(start_date="someday")

    def test_bad_cost_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SearchFilters(cost="cheap")

    def test_merged_with_overrides_only_set_fields(self) -> None:
        base = SearchFilters(cost="free", category="Hackathon")
        merged = base.merged_with(SearchFilters(category="Workshop", location="Pune"))
        assert merged.cost is CostFilter.FREE
        assert merged.category == "Workshop"
        assert merged.location == "Pune"

    def test_merged_with_none(self) -> None:
        base = SearchFilters(cost="paid")
        assert base.merged_with(None) is base


class TestTimeOfDay:
    @pytest.mark.parametrize(
        ("bucket", "inside", "outside"),
        [
            (TimeOfDay.BEFORE_6, 0, 360),
            (TimeOfDay.MORNING, 360, 720),
            (TimeOfDay.AFTERNOON, 720, 1080),
            (TimeOfDay.AFTER_6, 1080, 359),
        ],
    )
    def test_half_open_ranges(self, bucket: TimeOfDay, inside: int, outside: int) -> None:
        assert bucket.contains(inside)
        assert not bucket.contains(outside)


class TestParsedQuery:
    def test_defaults(self) -> None:
        parsed = ParsedQuery.model_validate({"semanticQuery": None, "filters": None})
        assert parsed.semantic_query == ""
        assert parsed.filters == SearchFilters()

    def test_null_semantic_query(self) -> None:
        assert ParsedQuery(semanticQuery="null").semantic_query == ""
