"""Search input and the per-search geographic data derived from it."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, Iterable, Tuple

from ..utils.dates import parse_date
from ..utils.text import split_terms, unique_terms

TICKETMASTER = "ticketmaster"
SKIDDLE = "skiddle"
ALL_PROVIDERS: FrozenSet[str] = frozenset({TICKETMASTER, SKIDDLE})


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A ``(longitude, latitude)`` pair in decimal degrees."""

    longitude: float
    latitude: float


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """What the user asked for: where, what kind, and when."""

    cities: Tuple[str, ...]
    genres: Tuple[str, ...]
    date_from: date
    date_to: date
    enabled_providers: FrozenSet[str] = field(default=ALL_PROVIDERS)

    def __post_init__(self) -> None:
        # Accept any iterable but store ordered, de-duplicated tuples.
        object.__setattr__(self, "cities", tuple(unique_terms(self.cities)))
        object.__setattr__(self, "genres", tuple(unique_terms(self.genres)))
        object.__setattr__(
            self,
            "enabled_providers",
            frozenset(p.strip().lower() for p in self.enabled_providers if p.strip()),
        )

    @classmethod
    def from_text(
        cls,
        cities: str,
        genres: str,
        date_from: str,
        date_to: str,
        providers: Iterable[str] | str | None = None,
    ) -> "SearchRequest":
        """Build a request from the comma-delimited strings typed on the CLI."""
        if providers is None:
            enabled = ALL_PROVIDERS
        elif isinstance(providers, str):
            enabled = frozenset(split_terms(providers))
        else:
            enabled = frozenset(providers)
        return cls(
            cities=tuple(split_terms(cities)),
            genres=tuple(split_terms(genres)),
            date_from=parse_date(date_from),
            date_to=parse_date(date_to),
            enabled_providers=enabled,
        )

    def date_problems(self, today: date) -> list[str]:
        """Describe every way the date window breaks its invariant."""
        problems = []
        if self.date_from < today:
            problems.append(f"date-from {self.date_from} is in the past")
        if self.date_from > self.date_to:
            problems.append(f"date-from {self.date_from} is after date-to {self.date_to}")
        return problems

    def is_enabled(self, provider: str) -> bool:
        return provider in self.enabled_providers

__all__ = [
    "Coordinate",
    "SearchRequest",
    "TICKETMASTER",
    "SKIDDLE",
    "ALL_PROVIDERS",
]
