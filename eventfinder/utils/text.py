"""Parsing helpers for the loosely formatted date/time columns of the dataset.

The source spreadsheet is hand-maintained, so dates arrive as ISO strings,
slash-separated year-first strings, or US-style ``M/D/YYYY``; times arrive as
``20:30`` or ``8:30 PM``.  Everything here returns ``None`` rather than
raising when a value cannot be understood.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

# Source data is authored in India Standard Time regardless of region.
SOURCE_TIMEZONE = timezone(timedelta(hours=5, minutes=30))

_ISO_DATE_RE = re.compile(r"^(\d{4})[-/](\d{1,2})[-/](\d{1,2})(?:[T ].*)?$")
_US_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?\s*([AaPp][Mm])?$")


def parse_event_date(value: object) -> date | None:
    """Parse a dataset date string into a :class:`date`.

    Accepts ``YYYY-MM-DD``, ``YYYY/MM/DD`` (optionally followed by a time
    part) and ``M/D/YYYY``.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    match = _ISO_DATE_RE.match(text)
    if match:
        year, month, day = (int(g) for g in match.groups())
    else:
        match = _US_DATE_RE.match(text)
        if not match:
            return None
        month, day, year = (int(g) for g in match.groups())

    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_clock_minutes(value: object) -> int | None:
    """Convert ``"8:30 PM"`` / ``"20:30"`` into minutes since midnight."""
    if not isinstance(value, str):
        return None

    match = _CLOCK_RE.match(value.strip())
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2))
    meridiem = (match.group(3) or "").upper()

    if minute > 59:
        return None
    if meridiem:
        if not 1 <= hour <= 12:
            return None
        if meridiem == "PM" and hour != 12:
            hour += 12
        elif meridiem == "AM" and hour == 12:
            hour = 0
    elif hour > 23:
        return None

    return hour * 60 + minute


def local_to_utc_iso(date_value: object, time_value: object) -> str | None:
    """Interpret a local date + clock time as IST and return a UTC ISO instant.

    The output matches JavaScript's ``Date.toISOString()``
    (``2024-05-01T14:30:00.000Z``) so the front end can parse it unchanged.
    """
    day = parse_event_date(date_value)
    minutes = parse_clock_minutes(time_value)
    if day is None or minutes is None:
        return None

    local = datetime(
        day.year, day.month, day.day, minutes // 60, minutes % 60, tzinfo=SOURCE_TIMEZONE
    )
    return local.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")


def format_price_label(price_cents: int) -> str:
    """Human price label used in search text: ``"Free"`` or ``"$12.50"``."""
    if price_cents <= 0:
        return "Free"
    return f"${price_cents / 100:.2f}"


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    # Keywords that start or end with a non-word character (``$0``, ``$``)
    # cannot use ``\b`` on that side.
    escaped = re.escape(keyword)
    prefix = r"\b" if re.match(r"\w", keyword) else r"(?<!\w)"
    suffix = r"\b" if re.search(r"\w$", keyword) else r"(?!\w)"
    return re.compile(prefix + escaped + suffix, re.IGNORECASE)


def remove_keyword(text: str, keyword: str) -> str:
    """Remove whole-word, case-insensitive occurrences of *keyword*."""
    return _keyword_pattern(keyword).sub("", text)


def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()
