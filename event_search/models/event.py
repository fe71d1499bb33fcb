"""Event records produced by providers and read from the calendar."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True, slots=True)
class FoundEvent:
    """One provider-reported event, normalized to a common shape."""

    name: str
    date: date
    city: str = ""
    ticket_url: str = ""
    genre: str = ""
    subgenre: str = ""


@dataclass(frozen=True, slots=True)
class CalendarEvent:
    """An entry already recorded in the user's calendar."""

    event_name: str
    date: date


@dataclass(frozen=True, slots=True)
class ClashStatus:
    """Whether a found event collides with a calendar entry on the same date."""

    clashing_with: Optional[str] = None

    @classmethod
    def clear(cls) -> "ClashStatus":
        return cls()

    @classmethod
    def clashing(cls, event_name: str) -> "ClashStatus":
        return cls(clashing_with=event_name)

    @property
    def is_clash(self) -> bool:
        return self.clashing_with is not None

__all__ = ["FoundEvent", "CalendarEvent", "ClashStatus"]
