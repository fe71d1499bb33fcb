"""Exception hierarchy shared by the search engine and its collaborators."""

from __future__ import annotations


class EventSearchError(Exception):
    """Base class for every error raised by event_search."""


class ConfigurationError(EventSearchError):
    """Static reference data (genre vocabularies) is missing or unreadable."""


class CityNotFoundError(EventSearchError):
    """The geocoding service could not resolve a city name."""

    def __init__(self, city: str, reason: str = "no match") -> None:
        super().__init__(f"Could not resolve city '{city}': {reason}")
        self.city = city


class ProviderError(EventSearchError):
    """A single provider invocation failed (transport or HTTP status)."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class ProviderDecodeError(ProviderError):
    """A provider answered with a body that does not match its expected shape."""


class InvalidDateRangeError(EventSearchError, ValueError):
    """The requested date window is unparseable, in the past or inverted."""


class CalendarInputError(EventSearchError, ValueError):
    """Calendar input could not be split into name/date pairs."""


__all__ = [
    "EventSearchError",
    "ConfigurationError",
    "CityNotFoundError",
    "ProviderError",
    "ProviderDecodeError",
    "InvalidDateRangeError",
    "CalendarInputError",
]
