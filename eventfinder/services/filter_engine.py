"""Structured event filtering.

:func:`filter_events` is pure: it never mutates its input, preserves the
input order, and ANDs every predicate whose filter value is set.  Applying
the same filters twice gives the same result as applying them once.
"""

from __future__ import annotations

from typing import Iterable

from eventfinder.models.event import Event
from eventfinder.models.search import CostFilter, SearchFilters
from eventfinder.utils.text import parse_clock_minutes, parse_event_date


def matches_category(event: Event, category: str | None) -> bool:
    """Loose, case-insensitive, bidirectional substring match.

    ``"tech"`` matches ``"Tech & AI"`` and ``"Tech & AI Summit"`` matches
    ``"tech & ai"``.  An event without a category matches every filter.
    """
    if not category:
        return True
    wanted = category.lower()
    actual = event.event_category.lower()
    return wanted in actual or actual in wanted


def matches_cost(event: Event, cost: CostFilter | None) -> bool:
    if cost is None:
        return True
    if cost is CostFilter.FREE:
        return event.price_cents <= 0
    return event.price_cents > 0


def matches_date_range(event: Event, filters: SearchFilters) -> bool:
    if filters.start_date is None and filters.end_date is None:
        return True
    start = parse_event_date(event.start_date)
    if start is None:
        return False
    if filters.start_date is not None and start < filters.start_date:
        return False
    if filters.end_date is not None and start > filters.end_date:
        return False
    return True


def matches_time_of_day(event: Event, filters: SearchFilters) -> bool:
    if filters.time_of_day is None:
        return True
    minutes = parse_clock_minutes(event.start_time)
    if minutes is None:
        return False
    return filters.time_of_day.contains(minutes)


def matches_location(event: Event, location: str | None) -> bool:
    if not location:
        return True
    wanted = location.lower()
    return wanted in event.region.lower() or wanted in event.full_address.lower()


def filter_events(events: Iterable[Event], filters: SearchFilters) -> list[Event]:
    """Return the events satisfying every set filter, in input order."""
    return [
        event
        for event in events
        if matches_category(event, filters.category)
        and matches_cost(event, filters.cost)
        and matches_date_range(event, filters)
        and matches_time_of_day(event, filters)
        and matches_location(event, filters.location)
    ]
