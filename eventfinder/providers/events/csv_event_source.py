"""CSV event source.

Reads the spreadsheet export (``data/dataBase.csv``) with the stdlib csv
module and turns every row into a frozen :class:`Event`.  File IO runs via
``asyncio.to_thread`` so startup does not block the event loop.

Row handling:
  - headers are trimmed; fully blank rows are skipped
  - ``id`` is ``"{row_index}-{event_name}"`` (row_index counts kept rows)
  - ``price_cents`` blanks and junk become 0 (see :class:`Event`)
  - ``start_datetime_utc`` / ``end_datetime_utc`` are derived from the local
    date and time columns read as IST; a pre-filled column is kept only when
    derivation fails
"""

from __future__ import annotations

import asyncio
import csv
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from eventfinder.interfaces.event_source import IEventSource
from eventfinder.models.event import Event
from eventfinder.utils.errors import EventSourceError
from eventfinder.utils.text import local_to_utc_iso

logger = structlog.get_logger(logger_name=__name__)


def row_to_event(index: int, row: dict[str, Any]) -> Event:
    """Build an :class:`Event` from one CSV row (headers already trimmed)."""
    name = (row.get("event_name") or "").strip()
    data = {k: v for k, v in row.items() if k}
    data["id"] = f"{index}-{name}"
    data["start_datetime_utc"] = local_to_utc_iso(
        row.get("start_date"), row.get("start_time")
    ) or (row.get("start_datetime_utc") or None)
    data["end_datetime_utc"] = local_to_utc_iso(
        row.get("end_date"), row.get("end_time")
    ) or (row.get("end_datetime_utc") or None)
    return Event.model_validate(data)


class CSVEventSource(IEventSource):
    """Loads events from a CSV file with a header row."""

    def __init__(self, csv_path: str | Path) -> None:
        self._csv_path = Path(csv_path)

    @property
    def csv_path(self) -> Path:
        return self._csv_path

    async def load_events(self) -> list[Event]:
        events = await asyncio.to_thread(self._load_sync)
        logger.info("events_loaded", path=str(self._csv_path), count=len(events))
        return events

    def _load_sync(self) -> list[Event]:
        try:
            with open(self._csv_path, encoding="utf-8-sig", newline="") as f:
                reader = csv.DictReader(f)
                if reader.fieldnames is None:
                    return []
                reader.fieldnames = [name.strip() for name in reader.fieldnames]

                events: list[Event] = []
                for row in reader:
                    if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
                        continue
                    events.append(row_to_event(len(events), row))
                return events
        except FileNotFoundError as exc:
            raise EventSourceError(
                message=f"Events file not found: {self._csv_path}",
                provider_name=self.get_provider_name(),
            ) from exc
        except (OSError, csv.Error, ValidationError) as exc:
            raise EventSourceError(
                message=f"Failed to read events from {self._csv_path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    def get_provider_name(self) -> str:
        return "csv"
