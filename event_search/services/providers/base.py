"""Common plumbing shared by every provider adapter."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from ...clients.http_client import get_session
from ...errors import ProviderDecodeError, ProviderError
from ...models.event import FoundEvent
from ...models.search import Coordinate, SearchRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderQuery:
    """Everything needed to issue one provider invocation."""

    provider: str
    url: str
    params: Dict[str, Any] = field(default_factory=dict)
    # Human readable scope for log lines, e.g. a city name.
    scope: str = ""


class ProviderAdapter(ABC):
    """One external event-listing API.

    Subclasses own the endpoint, the authentication parameter, the response
    shape and its normalization into :class:`FoundEvent`. Adding a provider
    means adding a subclass; the coordinator never changes.
    """

    name: str = ""
    requires_coordinates: bool = False

    def __init__(
        self,
        api_key: str | None,
        session: requests.Session | None = None,
        timeout: float = 30,
    ) -> None:
        self.api_key = api_key
        self.session = session or get_session()
        self.timeout = timeout

    @abstractmethod
    def build_query(
        self,
        request: SearchRequest,
        genres: str,
        coordinate: Optional[Coordinate] = None,
        scope: str = "",
    ) -> ProviderQuery:
        """Translate *request* and reconciled *genres* into this provider's query."""

    @abstractmethod
    def parse(self, payload: Any) -> List[FoundEvent]:
        """Normalize a decoded response body into found events."""

    def execute(self, query: ProviderQuery) -> List[FoundEvent]:
        """Run *query* and return its events, raising :class:`ProviderError` on failure."""
        return self.parse(self.fetch(query.url, query.params))

    def fetch(self, url: str, params: Dict[str, Any]) -> Any:
        """GET *url* and decode the JSON body."""
        if not self.api_key:
            raise ProviderError(self.name, "API key is not configured")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ProviderError(self.name, f"request failed: {exc}") from exc

        if response.status_code != 200:
            raise ProviderError(
                self.name,
                f"request failed with status {response.status_code}: {response.text[:200]}",
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ProviderDecodeError(self.name, f"response is not valid JSON: {exc}") from exc

    def _decode_error(self, message: str) -> ProviderDecodeError:
        return ProviderDecodeError(self.name, message)


def first_dict(value: Any) -> Dict[str, Any]:
    """First element of a JSON array when it is an object, else ``{}``."""
    if isinstance(value, list) and value and isinstance(value[0], dict):
        return value[0]
    return {}


def nested_str(data: Dict[str, Any], *keys: str) -> str:
    """Follow *keys* through nested objects, returning ``""`` when any hop is missing."""
    current: Any = data
    for key in keys:
        if not isinstance(current, dict):
            return ""
        current = current.get(key)
    return current if isinstance(current, str) else ""

__all__ = ["ProviderQuery", "ProviderAdapter", "first_dict", "nested_str"]
