"""Utility functions for working with calendar dates and provider wire formats."""

from __future__ import annotations

from datetime import date, datetime, time, timezone

from ..errors import InvalidDateRangeError

__all__ = [
    "parse_date",
    "parse_date_or_none",
    "to_iso_instant",
    "to_date_string",
    "today",
]

DATE_FORMAT = "%Y-%m-%d"


def parse_date(text: str) -> date:
    """Parse a ``YYYY-MM-DD`` string, raising :class:`InvalidDateRangeError`."""
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT).date()
    except (AttributeError, ValueError) as exc:
        raise InvalidDateRangeError(f"Invalid date '{text}', expected YYYY-MM-DD") from exc


def parse_date_or_none(text: str | None) -> date | None:
    """Lenient variant used when normalizing provider payloads."""
    if not text:
        return None
    try:
        return datetime.strptime(text[:10], DATE_FORMAT).date()
    except (TypeError, ValueError):
        return None


def to_iso_instant(value: date, end_of_day: bool = False) -> str:
    """*value* as an ISO-8601 UTC instant, e.g. ``2025-06-01T00:00:00Z``.

    With *end_of_day* the last second of the day is used instead of midnight.
    """
    moment = time(23, 59, 59) if end_of_day else time.min
    instant = datetime.combine(value, moment, tzinfo=timezone.utc)
    return instant.strftime("%Y-%m-%dT%H:%M:%SZ")


def to_date_string(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def today() -> date:
    """Return the current local calendar date."""
    return date.today()
