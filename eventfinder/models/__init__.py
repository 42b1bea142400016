"""eventfinder domain models.

    - event.py   - a single dataset row (frozen, served as-is over HTTP)
    - search.py  - structured filters and the interpreted query
"""

from __future__ import annotations

from eventfinder.models.event import Event
from eventfinder.models.search import CostFilter, ParsedQuery, SearchFilters, TimeOfDay

__all__ = [
    "CostFilter",
    "Event",
    "ParsedQuery",
    "SearchFilters",
    "TimeOfDay",
]
