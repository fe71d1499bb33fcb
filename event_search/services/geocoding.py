"""City name → coordinate resolution via the OpenCage geocoding API."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Protocol, Sequence, Tuple

import requests

from ..clients.http_client import get_session
from ..errors import CityNotFoundError
from ..models.search import Coordinate

logger = logging.getLogger(__name__)

OPENCAGE_GEOCODE_URL: str = "https://api.opencagedata.com/geocode/v1/json"


class GeocodingService(Protocol):
    def resolve(self, city: str) -> Coordinate:
        """Return the coordinate of *city* or raise :class:`CityNotFoundError`."""
        ...


class OpenCageGeocoder:
    """Forward geocoding through OpenCage, first result only."""

    def __init__(
        self,
        api_key: str | None,
        session: requests.Session | None = None,
        timeout: float = 30,
    ) -> None:
        self.api_key = api_key
        self.session = session or get_session()
        self.timeout = timeout

    def resolve(self, city: str) -> Coordinate:
        if not self.api_key:
            raise CityNotFoundError(city, "OPENCAGE_API_KEY is not set")

        params = {"q": city, "key": self.api_key, "limit": 1, "no_annotations": 1}
        try:
            response = self.session.get(OPENCAGE_GEOCODE_URL, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise CityNotFoundError(city, f"request failed: {exc}") from exc

        if response.status_code != 200:
            raise CityNotFoundError(city, f"HTTP {response.status_code}")

        try:
            results = response.json()["results"]
            geometry = results[0]["geometry"]
            return Coordinate(longitude=float(geometry["lng"]), latitude=float(geometry["lat"]))
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise CityNotFoundError(city) from exc


class GeoResolver:
    """Resolves every requested city, dropping the ones that cannot be found."""

    def __init__(self, geocoder: GeocodingService) -> None:
        self.geocoder = geocoder

    def _resolve_one(self, city: str) -> Optional[Coordinate]:
        try:
            coordinate = self.geocoder.resolve(city)
        except CityNotFoundError as exc:
            logger.warning("Skipping city for coordinate-based providers: %s", exc)
            return None
        logger.info(
            "Resolved '%s' to (%.4f, %.4f)", city, coordinate.longitude, coordinate.latitude
        )
        return coordinate

    def resolve(self, cities: Sequence[str]) -> List[Tuple[str, Coordinate]]:
        """Return ``(city, coordinate)`` pairs in request order for resolvable cities."""
        if not cities:
            return []
        with ThreadPoolExecutor(max_workers=len(cities)) as executor:
            coordinates = list(executor.map(self._resolve_one, cities))
        return [(city, coord) for city, coord in zip(cities, coordinates) if coord is not None]

__all__ = ["OPENCAGE_GEOCODE_URL", "GeocodingService", "OpenCageGeocoder", "GeoResolver"]
