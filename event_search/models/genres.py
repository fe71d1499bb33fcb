"""Provider genre vocabularies (static reference data)."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True, slots=True)
class GenreEntry:
    """One accepted genre. ``genre_id`` is ``None`` for label-only vocabularies."""

    name: str
    genre_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class GenreVocabulary:
    """Accepted genres for a single provider, in file order."""

    entries: Tuple[GenreEntry, ...]

    @property
    def has_ids(self) -> bool:
        return any(entry.genre_id is not None for entry in self.entries)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(entry.name for entry in self.entries)


@dataclass(frozen=True)
class GenreMapping:
    """Read-only, provider-keyed vocabularies loaded once per process."""

    vocabularies: Mapping[str, GenreVocabulary]

    def __post_init__(self) -> None:
        frozen = MappingProxyType({k.lower(): v for k, v in self.vocabularies.items()})
        object.__setattr__(self, "vocabularies", frozen)

    def for_provider(self, provider: str) -> Optional[GenreVocabulary]:
        return self.vocabularies.get(provider.lower())

    def __contains__(self, provider: object) -> bool:
        return isinstance(provider, str) and provider.lower() in self.vocabularies

__all__ = ["GenreEntry", "GenreVocabulary", "GenreMapping"]
