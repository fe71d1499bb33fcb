"""Command-line entry point: ``calendar`` and ``search`` subcommands."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence, Tuple

from pymongo.errors import PyMongoError

from .logging_config import logging as _  # noqa: F401  # ensure config applied early
from .errors import CalendarInputError, ConfigurationError, InvalidDateRangeError
from .models.event import ClashStatus, FoundEvent
from .models.search import ALL_PROVIDERS, SearchRequest
from .services.calendar_store import CalendarStore
from .workflows.search_pipeline import run_search

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="event-search",
        description="Find events across Ticketmaster and Skiddle and check them against your calendar.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    calendar = subparsers.add_parser("calendar", help="Manage calendar entries.")
    calendar.add_argument(
        "--add-events",
        default="",
        help='Comma separated event name/date pairs, e.g. "event name, 2025-06-01, event 2, 2025-06-02".',
    )
    calendar.add_argument(
        "--delete-event",
        default="",
        help="Delete every calendar entry with this exact name.",
    )
    calendar.add_argument(
        "--upcoming-events",
        action="store_true",
        help="Display calendar entries dated today or later.",
    )

    search = subparsers.add_parser("search", help="Search providers for events.")
    search.add_argument("--cities", required=True, help='Comma separated cities, e.g. "Manchester, Leeds".')
    search.add_argument("--genres", default="", help='Comma separated genres, e.g. "Techno, House".')
    search.add_argument("--date-from", required=True, help="First day to search (YYYY-MM-DD).")
    search.add_argument("--date-to", required=True, help="Last day to search (YYYY-MM-DD).")
    search.add_argument(
        "--providers",
        default=",".join(sorted(ALL_PROVIDERS)),
        help="Comma separated providers to query (default: all).",
    )
    search.add_argument(
        "--no-calendar",
        action="store_true",
        help="Do not cross-reference results with the calendar.",
    )
    return parser


def format_result(event: FoundEvent, status: ClashStatus) -> str:
    line = f"{event.date}  {event.name} [{event.city}]"
    if event.genre or event.subgenre:
        line += f" ({'/'.join(part for part in (event.genre, event.subgenre) if part)})"
    if event.ticket_url:
        line += f"  {event.ticket_url}"
    if status.is_clash:
        line += f"  !! clashes with '{status.clashing_with}'"
    return line


def handle_calendar(args: argparse.Namespace, store: Optional[CalendarStore] = None) -> int:
    if not (args.add_events or args.delete_event or args.upcoming_events):
        print("Nothing to do: pass --add-events, --delete-event or --upcoming-events.")
        return 1

    try:
        store = store or CalendarStore()
        if args.add_events:
            try:
                for event in store.add_events(args.add_events):
                    print(f"Added {event.event_name} on {event.date} to calendar")
            except CalendarInputError as exc:
                print(f"Events not added to calendar: {exc}")
                return 1
        if args.delete_event:
            removed = store.delete_event(args.delete_event)
            print(f"Deleted {removed} event(s) named {args.delete_event}")
        if args.upcoming_events:
            upcoming = store.upcoming_events()
            if not upcoming:
                print("No upcoming events in the calendar.")
            for event in upcoming:
                print(f"{event.date}  {event.event_name}")
    except (EnvironmentError, PyMongoError) as exc:
        logger.error("Calendar unavailable: %s", exc)
        print(f"Calendar unavailable: {exc}")
        return 1
    return 0


def handle_search(args: argparse.Namespace) -> int:
    try:
        request = SearchRequest.from_text(
            cities=args.cities,
            genres=args.genres,
            date_from=args.date_from,
            date_to=args.date_to,
            providers=args.providers,
        )
        results: List[Tuple[FoundEvent, ClashStatus]] = run_search(
            request, check_calendar=not args.no_calendar
        )
    except (InvalidDateRangeError, ConfigurationError) as exc:
        logger.error("Search aborted: %s", exc)
        print(f"Search aborted: {exc}")
        return 1
    except (EnvironmentError, PyMongoError) as exc:
        logger.error("Search aborted, calendar unavailable: %s", exc)
        print(f"Search aborted: calendar unavailable ({exc}). Use --no-calendar to skip the check.")
        return 1

    if not results:
        print("No events found.")
    for event, status in results:
        print(format_result(event, status))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "calendar":
        return handle_calendar(args)
    return handle_search(args)

__all__ = ["build_parser", "format_result", "main"]
