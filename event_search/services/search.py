"""Multi-provider search: plan, fan out, gather and order."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import date
from operator import attrgetter
from typing import Callable, Iterable, List, Mapping, Optional, Tuple

from ..errors import InvalidDateRangeError, ProviderError
from ..models.event import CalendarEvent, ClashStatus, FoundEvent
from ..models.search import Coordinate, SearchRequest
from ..utils.dates import today as current_date
from .clashes import CalendarClashDetector
from .genres import GenreReconciler
from .geocoding import GeoResolver
from .providers.base import ProviderAdapter, ProviderQuery

logger = logging.getLogger(__name__)

Invocation = Tuple[ProviderAdapter, ProviderQuery]


class SearchCoordinator:
    """Runs one search across every enabled provider.

    Each (provider, city) pair becomes an independent invocation executed on
    its own thread. A failing invocation contributes no events and never
    affects its siblings; the caller only sees the union of what succeeded,
    sorted by date.
    """

    def __init__(
        self,
        adapters: Mapping[str, ProviderAdapter],
        reconciler: GenreReconciler,
        geo_resolver: GeoResolver,
        clash_detector: Optional[CalendarClashDetector] = None,
        strict_dates: bool = False,
        today: Callable[[], date] = current_date,
    ) -> None:
        self.adapters = dict(adapters)
        self.reconciler = reconciler
        self.geo_resolver = geo_resolver
        self.clash_detector = clash_detector or CalendarClashDetector()
        self.strict_dates = strict_dates
        self._today = today

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def search(self, request: SearchRequest) -> List[FoundEvent]:
        """Return every event found for *request*, ascending by date."""
        self._check_dates(request)

        invocations = self.plan(request)
        if not invocations:
            logger.info("No provider invocations to run")
            return []

        batches = self._fan_out(invocations)
        events = [event for batch in batches for event in batch]
        # sorted() is stable, so same-day events keep their gather order.
        events = sorted(events, key=attrgetter("date"))
        self._log_stats(invocations, batches, events)
        return events

    def search_with_clash_detection(
        self,
        request: SearchRequest,
        calendar_events: Iterable[CalendarEvent],
    ) -> List[Tuple[FoundEvent, ClashStatus]]:
        """Like :meth:`search`, with each event classified against the calendar."""
        events = self.search(request)
        return self.clash_detector.annotate(events, calendar_events)

    def plan(self, request: SearchRequest) -> List[Invocation]:
        """Build the full list of invocations for *request*, in launch order."""
        active = self._active_adapters(request)
        if not active:
            return []

        self.reconciler.check_coverage(adapter.name for adapter in active)
        needs_coordinates = any(adapter.requires_coordinates for adapter in active)
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="geo") as executor:
            located_future = (
                executor.submit(self.geo_resolver.resolve, request.cities)
                if needs_coordinates
                else None
            )
            genres = {
                adapter.name: self.reconciler.reconcile(request.genres, adapter.name)
                for adapter in active
            }
            located: List[Tuple[str, Coordinate]] = (
                located_future.result() if located_future is not None else []
            )

        invocations: List[Invocation] = []
        for adapter in active:
            if adapter.requires_coordinates:
                for city, coordinate in located:
                    query = adapter.build_query(request, genres[adapter.name], coordinate, scope=city)
                    invocations.append((adapter, query))
            else:
                invocations.append((adapter, adapter.build_query(request, genres[adapter.name])))
        return invocations

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_dates(self, request: SearchRequest) -> None:
        problems = request.date_problems(self._today())
        if not problems:
            return
        for problem in problems:
            logger.warning("Invalid date range: %s", problem)
        if self.strict_dates:
            raise InvalidDateRangeError("; ".join(problems))

    def _active_adapters(self, request: SearchRequest) -> List[ProviderAdapter]:
        unknown = request.enabled_providers.difference(self.adapters)
        if unknown:
            logger.warning("Ignoring unknown providers: %s", ", ".join(sorted(unknown)))
        return [adapter for name, adapter in self.adapters.items() if request.is_enabled(name)]

    def _fan_out(self, invocations: List[Invocation]) -> List[List[FoundEvent]]:
        """Run all invocations at once and wait for every one of them."""
        logger.info("Launching %d provider invocations", len(invocations))
        with ThreadPoolExecutor(
            max_workers=len(invocations), thread_name_prefix="provider"
        ) as executor:
            futures = [
                executor.submit(self._run_invocation, adapter, query)
                for adapter, query in invocations
            ]
            wait(futures)
        # Gathered in launch order, not completion order.
        return [future.result() for future in futures]

    @staticmethod
    def _run_invocation(adapter: ProviderAdapter, query: ProviderQuery) -> List[FoundEvent]:
        try:
            events = adapter.execute(query)
        except ProviderError as exc:
            logger.warning("Provider call failed (%s): %s", query.scope or "-", exc)
            return []
        except Exception:
            logger.exception("Unexpected error from %s (%s)", adapter.name, query.scope or "-")
            return []
        logger.info("%s returned %d events for %s", adapter.name, len(events), query.scope or "-")
        return events

    @staticmethod
    def _log_stats(
        invocations: List[Invocation],
        batches: List[List[FoundEvent]],
        events: List[FoundEvent],
    ) -> None:
        logger.info("=== Search Statistics ===")
        logger.info("Provider invocations: %d", len(invocations))
        logger.info("Invocations with events: %d", sum(1 for batch in batches if batch))
        logger.info("Total events found: %d", len(events))
        logger.info("=========================")

__all__ = ["SearchCoordinator"]
