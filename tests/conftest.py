"""Shared pytest fixtures for the eventfinder test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from eventfinder.interfaces.event_source import IEventSource
from eventfinder.interfaces.llm_provider import ILLMProvider
from eventfinder.interfaces.vector_store_provider import IVectorStoreProvider
from eventfinder.models.event import Event

# ---------------------------------------------------------------------------
# Sample dataset
# ---------------------------------------------------------------------------

_SAMPLE_ROWS: list[dict[str, Any]] = [
    {
        "event_name": "AI Hackathon Bangalore",
        "event_summary": "Build with LLMs over 24 hours",
        "event_category": "Hackathon",
        "price_cents": 0,
        "start_date": "2024-05-10",
        "start_time": "09:00",
        "region": "Bangalore",
        "full_address": "Koramangala, Bangalore",
    },
    {
        "event_name": "Intro to Machine Learning Workshop",
        "event_summary": "Hands-on ML basics",
        "event_category": "Workshop",
        "price_cents": 50000,
        "start_date": "2024-05-12",
        "start_time": "14:00",
        "region": "Mumbai",
    },
    {
        "event_name": "Startup Networking Night",
        "event_summary": "Meet founders and investors",
        "event_category": "Networking & Community",
        "price_cents": 0,
        "start_date": "2024-05-15",
        "start_time": "7:30 PM",
        "region": "Delhi",
    },
    {
        "event_name": "Tech & AI Summit",
        "event_summary": "Keynotes on applied AI",
        "event_category": "Tech & AI",
        "price_cents": 250000,
        "start_date": "2024-06-01",
        "start_time": "10:00",
        "region": "Bangalore",
    },
    {
        "event_name": "Finance for Founders",
        "event_summary": "Money basics for early-stage teams",
        "event_category": "Finance & Business",
        "price_cents": 1500,
        "start_date": "2024-06-03",
        "start_time": "5:30 AM",
        "region": "Mumbai",
    },
    {
        "event_name": "Community Garden Meetup",
        "event_summary": "Plant trees with neighbours",
        "event_category": "",
        "price_cents": 0,
        "start_date": "2024-06-05",
        "start_time": "17:00",
        "region": "Pune",
    },
    {
        "event_name": "Deep Learning Reading Group",
        "event_summary": "Weekly paper discussion",
        "event_category": "Education & Research",
        "price_cents": 0,
        "start_date": "6/10/2024",
        "start_time": "8:00 PM",
        "region": "Bangalore",
        "event_description": "Bring a laptop and snacks",
    },
    {
        "event_name": "Product Marketing Panel",
        "event_summary": "Positioning for B2B products",
        "event_category": "Marketing & Branding",
        "price_cents": 999,
        "start_date": "",
        "start_time": "",
        "region": "Delhi",
    },
]


def make_event(index: int, **fields: Any) -> Event:
    """Build an :class:`Event` with the dataset's id convention."""
    name = fields.get("event_name", "")
    return Event(id=f"{index}-{name}", **fields)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def sample_events() -> list[Event]:
    """Eight events covering every category, price and time-of-day bucket."""
    return [make_event(i, **row) for i, row in enumerate(_SAMPLE_ROWS)]


# ---------------------------------------------------------------------------
# Mock collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_event_source(sample_events: list[Event]) -> MagicMock:
    source = MagicMock(spec=IEventSource)
    source.load_events = AsyncMock(return_value=sample_events)
    source.get_provider_name.return_value = "mock_source"
    return source


@pytest.fixture
def mock_llm_provider() -> MagicMock:
    provider = MagicMock(spec=ILLMProvider)
    provider.complete = AsyncMock(return_value="{}")
    provider.get_provider_name.return_value = "mock_llm"
    provider.is_available.return_value = True
    return provider


@pytest.fixture
def mock_vector_store() -> MagicMock:
    store = MagicMock(spec=IVectorStoreProvider)
    store.query = AsyncMock(return_value=[])
    store.count.return_value = 8
    store.get_provider_name.return_value = "mock_vectors"
    store.is_available.return_value = True
    return store
