"""Immutable in-memory event store.

Holds the full dataset for the life of the process.  Built once from an
:class:`IEventSource` during service initialisation and never mutated
afterwards, so every request can read it without locking.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from eventfinder.interfaces.event_source import IEventSource
from eventfinder.models.event import Event


class EventStore:
    """Read-only, ordered collection of events plus their category labels."""

    def __init__(self, events: Sequence[Event]) -> None:
        self._events: tuple[Event, ...] = tuple(events)
        self._by_id: dict[str, Event] = {event.id: event for event in self._events}

        seen: dict[str, None] = {}
        for event in self._events:
            if event.event_category:
                seen.setdefault(event.event_category, None)
        self._categories: tuple[str, ...] = tuple(seen)

    @classmethod
    async def from_source(cls, source: IEventSource) -> EventStore:
        return cls(await source.load_events())

    @property
    def events(self) -> tuple[Event, ...]:
        """All events in ingestion order."""
        return self._events

    @property
    def categories(self) -> tuple[str, ...]:
        """Distinct non-empty category labels, in first-seen order."""
        return self._categories

    def ids(self) -> list[str]:
        return [event.id for event in self._events]

    def get(self, event_id: str) -> Event | None:
        return self._by_id.get(event_id)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)
