"""Abstract base class for event dataset sources.

The search service never reads files itself: it asks an event source for
the full list of events once, at startup.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from eventfinder.models.event import Event


# Concrete implementation: CSVEventSource (eventfinder/providers/events/)
class IEventSource(ABC):
    """Contract for loading the event dataset."""

    @abstractmethod
    async def load_events(self) -> list[Event]:
        """Return every event, in ingestion order.

        Raises
        ------
        eventfinder.utils.errors.EventSourceError
            If the dataset cannot be read.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this source."""
