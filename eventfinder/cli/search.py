"""Standalone CLI for running a search against the local dataset.

Usage::

    python -m eventfinder.cli "free ai workshops"
    python -m eventfinder.cli "hackathons" --json --limit 5
    python -m eventfinder.cli "" --cost free --category tech

Builds the same :class:`SearchService` the API uses (same settings, same
providers) and prints matches as a short table or as JSON.  Exits 1 when
the dataset cannot be loaded or the filters are invalid.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
import time
from typing import Sequence

from pydantic import ValidationError

from eventfinder.models.event import Event
from eventfinder.models.search import SearchFilters
from eventfinder.utils.errors import EventFinderError


def _format_text_output(events: Sequence[Event], total: int) -> str:
    lines: list[str] = []
    for index, event in enumerate(events, start=1):
        when = " ".join(part for part in (event.start_date, event.start_time) if part)
        category = event.event_category or "-"
        lines.append(f"{index:>3}. {event.event_name or '(untitled)'}")
        lines.append(f"     {category}  |  {event.price_label}  |  {when or 'date tba'}")
        if event.region or event.full_address:
            lines.append(f"     {event.region or event.full_address}")
    if total > len(events):
        lines.append(f"... and {total - len(events)} more")
    lines.append(f"{total} event(s) matched")
    return "\n".join(lines)


def _format_json_output(events: Sequence[Event]) -> str:
    return json.dumps([event.model_dump(mode="json") for event in events], indent=2)


def _suppress_logs() -> None:
    """Send structlog and stdlib logging to stderr at WARNING+.

    Must run before ``eventfinder.main`` is imported, since structlog caches
    loggers on first use.
    """
    import logging
    import os

    import structlog

    os.environ["LOG_LEVEL"] = "WARNING"
    os.environ["LOG_TO_STDERR"] = "true"

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.WARNING)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


async def _run(args: argparse.Namespace) -> int:
    """Build the service, run one search, print the results."""
    import httpx

    # Deferred: eventfinder.main reads settings and configures logging on import.
    from eventfinder.main import build_search_service, config, settings

    try:
        filters = SearchFilters(
            cost=args.cost,
            category=args.category,
            start_date=args.start_date,
            end_date=args.end_date,
            time_of_day=args.time_of_day,
            location=args.location,
        )
    except ValidationError as exc:
        print(f"Error: invalid filters: {exc}", file=sys.stderr)
        return 1

    async with httpx.AsyncClient(timeout=30.0) as http_client:
        service = build_search_service(settings, config, http_client)
        start = time.monotonic()
        try:
            results = await service.search(args.query, filters)
        except EventFinderError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        elapsed = time.monotonic() - start

    shown = results[: args.limit] if args.limit > 0 else results
    if args.json_output:
        print(_format_json_output(shown))
    else:
        print(_format_text_output(shown, len(results)))
        print(f"Done in {elapsed:.2f}s", file=sys.stderr)
    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m eventfinder.cli",
        description="Search the event dataset from the command line.",
    )
    parser.add_argument(
        "query",
        nargs="?",
        default="",
        help='Free-text query, e.g. "free ai workshops". Empty lists everything.',
    )
    parser.add_argument("--cost", choices=["free", "paid"], default=None)
    parser.add_argument("--category", default=None, help="Category name or fragment.")
    parser.add_argument("--start-date", dest="start_date", default=None, help="YYYY-MM-DD")
    parser.add_argument("--end-date", dest="end_date", default=None, help="YYYY-MM-DD")
    parser.add_argument(
        "--time-of-day",
        dest="time_of_day",
        choices=["before6", "morning", "afternoon", "after6"],
        default=None,
    )
    parser.add_argument("--location", default=None, help="Region or address fragment.")
    parser.add_argument(
        "--limit", "-n",
        type=int,
        default=20,
        help="Maximum results to print (0 for all). Default: 20.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Print matching events as a JSON array.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress log output (implied by --json).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.quiet or args.json_output:
        _suppress_logs()

    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
