"""Domain models used across the project."""

from .event import CalendarEvent, ClashStatus, FoundEvent  # noqa: F401
from .genres import GenreEntry, GenreMapping, GenreVocabulary  # noqa: F401
from .search import (  # noqa: F401
    ALL_PROVIDERS,
    SKIDDLE,
    TICKETMASTER,
    Coordinate,
    SearchRequest,
)

__all__ = [
    "FoundEvent",
    "CalendarEvent",
    "ClashStatus",
    "GenreEntry",
    "GenreVocabulary",
    "GenreMapping",
    "Coordinate",
    "SearchRequest",
    "TICKETMASTER",
    "SKIDDLE",
    "ALL_PROVIDERS",
]
