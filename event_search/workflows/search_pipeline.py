"""End-to-end search: wire collaborators from settings, search, check the calendar."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import requests

from ..logging_config import logging as _  # noqa: F401  # ensure config applied early
from ..config import Settings, get_settings
from ..models.event import ClashStatus, FoundEvent
from ..models.search import SearchRequest
from ..services.calendar_store import CalendarStore
from ..services.genres import GenreReconciler, load_genre_mapping
from ..services.geocoding import GeoResolver, OpenCageGeocoder
from ..services.providers import build_adapters
from ..services.search import SearchCoordinator

logger = logging.getLogger(__name__)


def build_coordinator(
    settings: Optional[Settings] = None,
    session: Optional[requests.Session] = None,
) -> SearchCoordinator:
    """Assemble a coordinator from *settings* (the process settings by default)."""
    settings = settings or get_settings()
    mapping = load_genre_mapping(settings.genres_path)
    geocoder = OpenCageGeocoder(
        settings.opencage_api_key, session=session, timeout=settings.request_timeout
    )
    return SearchCoordinator(
        adapters=build_adapters(settings, session=session),
        reconciler=GenreReconciler(mapping),
        geo_resolver=GeoResolver(geocoder),
        strict_dates=settings.strict_date_validation,
    )


def run_search(
    request: SearchRequest,
    check_calendar: bool = True,
    coordinator: Optional[SearchCoordinator] = None,
    calendar_store: Optional[CalendarStore] = None,
) -> List[Tuple[FoundEvent, ClashStatus]]:
    """Execute one search and return date-ordered events with their clash status."""
    logger.info(
        "Searching %s for %s between %s and %s",
        ", ".join(request.cities) or "-",
        ", ".join(request.genres) or "any genre",
        request.date_from,
        request.date_to,
    )
    coordinator = coordinator or build_coordinator()

    if not check_calendar:
        return [(event, ClashStatus.clear()) for event in coordinator.search(request)]

    store = calendar_store or CalendarStore()
    calendar_events = store.list_events()
    return coordinator.search_with_clash_detection(request, calendar_events)

__all__ = ["build_coordinator", "run_search"]
