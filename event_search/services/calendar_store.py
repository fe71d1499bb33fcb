"""Persistence layer: the user's personal calendar stored in MongoDB."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from pymongo.collection import Collection

from ..clients.mongodb_client import get_mongo_client
from ..config import CALENDAR_COLLECTION, MONGODB_DATABASE
from ..errors import CalendarInputError, InvalidDateRangeError
from ..models.event import CalendarEvent
from ..utils.dates import parse_date, parse_date_or_none, to_date_string
from ..utils.dates import today as current_date

logger = logging.getLogger(__name__)


class CalendarStore:
    """Calendar entries as ``{"event_name": str, "date": "YYYY-MM-DD"}`` documents."""

    def __init__(self, collection: Optional[Collection] = None) -> None:
        if collection is None:
            collection = get_mongo_client()[MONGODB_DATABASE][CALENDAR_COLLECTION]
        self._collection = collection

    def add_event(self, event_name: str, event_date: date) -> CalendarEvent:
        """Insert a single entry."""
        event = CalendarEvent(event_name=event_name, date=event_date)
        result = self._collection.insert_one(
            {"event_name": event_name, "date": to_date_string(event_date)}
        )
        logger.info(
            "Added '%s' on %s to calendar (_id=%s)", event_name, event_date, result.inserted_id
        )
        return event

    def add_events(self, text: str) -> List[CalendarEvent]:
        """Insert entries from ``"event name, 2025-06-01, event 2, 2025-06-02"``.

        Pairs whose date does not parse are skipped with a warning; the rest
        are still stored.
        """
        items = [item.strip() for item in text.split(",")]
        if not text.strip() or len(items) % 2 != 0:
            raise CalendarInputError(
                f"Expected pairs of event name and date, got: {text!r}"
            )

        added: List[CalendarEvent] = []
        for event_name, raw_date in zip(items[::2], items[1::2]):
            try:
                event_date = parse_date(raw_date)
            except InvalidDateRangeError:
                logger.warning("Event '%s' not added: invalid date '%s'", event_name, raw_date)
                continue
            added.append(self.add_event(event_name, event_date))
        return added

    def delete_event(self, event_name: str) -> int:
        """Remove every entry named *event_name*; return how many were removed."""
        result = self._collection.delete_many({"event_name": event_name})
        logger.info("Deleted %d calendar entries named '%s'", result.deleted_count, event_name)
        return result.deleted_count

    def list_events(self) -> List[CalendarEvent]:
        """Return all entries ordered by date (storage order within a day)."""
        events: List[CalendarEvent] = []
        for document in self._collection.find({}, {"_id": 0, "event_name": 1, "date": 1}):
            event_date = parse_date_or_none(document.get("date"))
            if event_date is None:
                logger.warning("Skipping calendar entry with bad date: %r", document)
                continue
            events.append(CalendarEvent(event_name=document.get("event_name", ""), date=event_date))
        return sorted(events, key=lambda event: event.date)

    def upcoming_events(self, today: Optional[date] = None) -> List[CalendarEvent]:
        """Return entries dated today or later."""
        cutoff = today or current_date()
        return [event for event in self.list_events() if event.date >= cutoff]

__all__ = ["CalendarStore"]
