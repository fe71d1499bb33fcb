"""Cross-reference found events against the user's calendar."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, List, Sequence, Tuple

from ..models.event import CalendarEvent, ClashStatus, FoundEvent

logger = logging.getLogger(__name__)


class CalendarClashDetector:
    """Flags found events that fall on a date already taken in the calendar."""

    @staticmethod
    def build_lookup(calendar_events: Iterable[CalendarEvent]) -> Dict[date, str]:
        """Map each calendar date to an event name.

        Only one name is kept per date: when several calendar entries share a
        date the last one wins.
        """
        lookup: Dict[date, str] = {}
        for entry in calendar_events:
            lookup[entry.date] = entry.event_name
        return lookup

    def annotate(
        self,
        events: Sequence[FoundEvent],
        calendar_events: Iterable[CalendarEvent],
    ) -> List[Tuple[FoundEvent, ClashStatus]]:
        """Pair every event with its clash status, keeping the input order."""
        lookup = self.build_lookup(calendar_events)
        annotated = [(event, self.classify(event, lookup)) for event in events]
        clashes = sum(1 for _, status in annotated if status.is_clash)
        logger.info("%d of %d found events clash with the calendar", clashes, len(annotated))
        return annotated

    @staticmethod
    def classify(event: FoundEvent, lookup: Dict[date, str]) -> ClashStatus:
        name = lookup.get(event.date)
        if name is None:
            return ClashStatus.clear()
        return ClashStatus.clashing(name)

__all__ = ["CalendarClashDetector"]
