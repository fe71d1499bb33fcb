"""Ticketmaster Discovery API adapter (free-text city list, ISO instants)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from ...models.event import FoundEvent
from ...models.search import TICKETMASTER, Coordinate, SearchRequest
from ...utils.dates import parse_date_or_none, to_iso_instant
from .base import ProviderAdapter, ProviderQuery, first_dict, nested_str

logger = logging.getLogger(__name__)

TICKETMASTER_EVENTS_URL: str = "https://app.ticketmaster.com/discovery/v2/events.json"


class TicketmasterAdapter(ProviderAdapter):
    """Queries every requested city in one call and walks the result pages."""

    name = TICKETMASTER
    requires_coordinates = False

    def __init__(
        self,
        api_key: str | None,
        session: requests.Session | None = None,
        timeout: float = 30,
        page_size: int = 100,
        max_pages: int = 5,
    ) -> None:
        super().__init__(api_key, session=session, timeout=timeout)
        self.page_size = page_size
        self.max_pages = max(1, max_pages)

    def build_query(
        self,
        request: SearchRequest,
        genres: str,
        coordinate: Optional[Coordinate] = None,
        scope: str = "",
    ) -> ProviderQuery:
        params: Dict[str, Any] = {
            "apikey": self.api_key,
            "startDateTime": to_iso_instant(request.date_from),
            "endDateTime": to_iso_instant(request.date_to, end_of_day=True),
            "size": self.page_size,
        }
        if request.cities:
            params["city"] = ",".join(request.cities)
        else:
            logger.warning("No cities given; Ticketmaster search is not narrowed to any city")
        if genres:
            params["classificationName"] = genres
        return ProviderQuery(
            provider=self.name,
            url=TICKETMASTER_EVENTS_URL,
            params=params,
            scope=scope or ", ".join(request.cities),
        )

    def execute(self, query: ProviderQuery) -> List[FoundEvent]:
        events: List[FoundEvent] = []
        page = 0
        while True:
            payload = self.fetch(query.url, {**query.params, "page": page})
            events.extend(self.parse(payload))
            page += 1
            total_pages = self._total_pages(payload)
            if page >= total_pages or page >= self.max_pages:
                break
            logger.debug("Fetching Ticketmaster page %d of %d", page + 1, total_pages)
        return events

    def _total_pages(self, payload: Dict[str, Any]) -> int:
        page_info = payload.get("page")
        if not isinstance(page_info, dict):
            return 1
        try:
            return int(page_info.get("totalPages", 1))
        except (TypeError, ValueError):
            raise self._decode_error(f"bad page block: {page_info!r}")

    def parse(self, payload: Any) -> List[FoundEvent]:
        if not isinstance(payload, dict):
            raise self._decode_error("expected a JSON object")

        # Ticketmaster leaves out `_embedded` entirely when nothing matched.
        embedded = payload.get("_embedded") or {}
        raw_events = embedded.get("events", []) if isinstance(embedded, dict) else None
        if not isinstance(raw_events, list):
            raise self._decode_error("`_embedded.events` is not a list")

        events: List[FoundEvent] = []
        for raw in raw_events:
            event = self._normalize(raw)
            if event is not None:
                events.append(event)
        return events

    def _normalize(self, raw: Any) -> Optional[FoundEvent]:
        if not isinstance(raw, dict):
            logger.warning("Ignoring non-object Ticketmaster event: %r", raw)
            return None

        event_date = parse_date_or_none(nested_str(raw, "dates", "start", "localDate"))
        if event_date is None:
            logger.warning("Ignoring Ticketmaster event without a date: %s", raw.get("name"))
            return None

        venue = first_dict(nested_dict(raw, "_embedded").get("venues"))
        classification = first_dict(raw.get("classifications"))
        return FoundEvent(
            name=raw.get("name") or "",
            date=event_date,
            city=nested_str(venue, "city", "name"),
            ticket_url=raw.get("url") or "",
            genre=nested_str(classification, "segment", "name"),
            subgenre=nested_str(classification, "genre", "name"),
        )


def nested_dict(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}

__all__ = ["TICKETMASTER_EVENTS_URL", "TicketmasterAdapter"]
