"""Service layer modules grouping business logic by concern.

This module provides convenience re-exports so that callers can simply do for
example `from event_search.services import SearchCoordinator` without having to
know which underlying module provides the symbol.
"""

from .calendar_store import CalendarStore  # noqa: F401
from .clashes import CalendarClashDetector  # noqa: F401
from .genres import GenreReconciler, load_genre_mapping  # noqa: F401
from .geocoding import GeoResolver, OpenCageGeocoder  # noqa: F401
from .providers import build_adapters  # noqa: F401
from .search import SearchCoordinator  # noqa: F401

__all__ = [
    "CalendarStore",
    "CalendarClashDetector",
    "GenreReconciler",
    "load_genre_mapping",
    "GeoResolver",
    "OpenCageGeocoder",
    "build_adapters",
    "SearchCoordinator",
]
