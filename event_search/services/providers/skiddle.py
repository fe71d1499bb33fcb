"""Skiddle API adapter (one call per resolved city, bare calendar dates)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from ...models.event import FoundEvent
from ...models.search import SKIDDLE, Coordinate, SearchRequest
from ...utils.dates import parse_date_or_none, to_date_string
from .base import ProviderAdapter, ProviderQuery, first_dict, nested_str

logger = logging.getLogger(__name__)

SKIDDLE_SEARCH_URL: str = "https://www.skiddle.com/api/v1/events/search/"
SKIDDLE_RESULT_LIMIT: int = 100


class SkiddleAdapter(ProviderAdapter):
    """Searches a radius around one coordinate per invocation."""

    name = SKIDDLE
    requires_coordinates = True

    def __init__(
        self,
        api_key: str | None,
        session: requests.Session | None = None,
        timeout: float = 30,
        radius: int = 8,
    ) -> None:
        super().__init__(api_key, session=session, timeout=timeout)
        self.radius = radius

    def build_query(
        self,
        request: SearchRequest,
        genres: str,
        coordinate: Optional[Coordinate] = None,
        scope: str = "",
    ) -> ProviderQuery:
        if coordinate is None:
            raise ValueError("Skiddle queries need a coordinate")

        params: Dict[str, Any] = {
            "api_key": self.api_key,
            "longitude": f"{coordinate.longitude:f}",
            "latitude": f"{coordinate.latitude:f}",
            "radius": self.radius,
            "minDate": to_date_string(request.date_from),
            "maxDate": to_date_string(request.date_to),
            "description": 1,
            "limit": SKIDDLE_RESULT_LIMIT,
        }
        if genres:
            params["g"] = genres
        return ProviderQuery(provider=self.name, url=SKIDDLE_SEARCH_URL, params=params, scope=scope)

    def parse(self, payload: Any) -> List[FoundEvent]:
        if not isinstance(payload, dict):
            raise self._decode_error("expected a JSON object")
        if payload.get("error"):
            raise self._decode_error(f"API error: {payload.get('errormessage', payload['error'])}")

        results = payload.get("results")
        if not isinstance(results, list):
            raise self._decode_error("`results` is not a list")

        events: List[FoundEvent] = []
        for raw in results:
            if not isinstance(raw, dict):
                logger.warning("Ignoring non-object Skiddle result: %r", raw)
                continue
            event_date = parse_date_or_none(raw.get("date"))
            if event_date is None:
                logger.warning("Ignoring Skiddle event without a date: %s", raw.get("eventname"))
                continue
            events.append(
                FoundEvent(
                    name=raw.get("eventname") or "",
                    date=event_date,
                    city=nested_str(raw, "venue", "town"),
                    ticket_url=raw.get("link") or "",
                    genre=raw.get("EventCode") or "",
                    subgenre=nested_str(first_dict(raw.get("genres")), "name"),
                )
            )
        return events

__all__ = ["SKIDDLE_SEARCH_URL", "SkiddleAdapter"]
