"""Genre reconciliation: free-text user genres → each provider's vocabulary."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from ..errors import ConfigurationError
from ..models.genres import GenreEntry, GenreMapping, GenreVocabulary

logger = logging.getLogger(__name__)

PERFECT_SCORE: float = 1.0


def _fold(text: str) -> str:
    return text.strip().casefold()


def _parse_entry(provider: str, raw: Any) -> GenreEntry:
    if isinstance(raw, str):
        return GenreEntry(name=raw)
    if isinstance(raw, dict) and isinstance(raw.get("Name"), str) and "ID" in raw:
        return GenreEntry(name=raw["Name"], genre_id=str(raw["ID"]))
    raise ConfigurationError(f"Malformed genre entry for provider '{provider}': {raw!r}")


def load_genre_mapping(path: Path | str) -> GenreMapping:
    """Read the provider-keyed vocabulary file.

    The file maps each provider to ``{"Genres": [...]}`` where the list holds
    either plain labels or ``{"Name": ..., "ID": ...}`` objects. Any problem
    reading or interpreting the file is fatal: without vocabularies no
    provider query can be built.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            raw = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Cannot load genre vocabularies from {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Genre vocabulary file {path} must contain a JSON object")

    vocabularies: Dict[str, GenreVocabulary] = {}
    for provider, section in raw.items():
        genres = section.get("Genres") if isinstance(section, dict) else None
        if not isinstance(genres, list) or not genres:
            raise ConfigurationError(f"Provider '{provider}' has no 'Genres' list in {path}")
        entries = tuple(_parse_entry(provider, item) for item in genres)
        if len({entry.genre_id is None for entry in entries}) > 1:
            raise ConfigurationError(
                f"Provider '{provider}' mixes plain labels and ID entries in {path}"
            )
        vocabularies[provider] = GenreVocabulary(entries=entries)

    logger.info("Loaded genre vocabularies for %s", ", ".join(sorted(vocabularies)))
    return GenreMapping(vocabularies=vocabularies)


def similarity(a: str, b: str) -> float:
    """Levenshtein similarity normalized to 0.0–1.0, ignoring case and padding."""
    return Levenshtein.normalized_similarity(_fold(a), _fold(b))


class GenreReconciler:
    """Maps user genre terms onto the vocabulary each provider accepts."""

    def __init__(self, mapping: GenreMapping) -> None:
        self._mapping = mapping

    @property
    def mapping(self) -> GenreMapping:
        return self._mapping

    def check_coverage(self, providers: Iterable[str]) -> None:
        """Raise :class:`ConfigurationError` unless every provider has a vocabulary."""
        missing = sorted(name for name in providers if name not in self._mapping)
        if missing:
            raise ConfigurationError(
                f"No genre vocabulary configured for provider(s): {', '.join(missing)}"
            )

    def reconcile(self, terms: Iterable[str], provider: str) -> str:
        """Return the comma-joined best matches of *terms* for *provider*.

        For ID vocabularies the IDs are joined, for label vocabularies the
        labels are. User term order is preserved; blank terms are ignored.
        """
        vocabulary = self._mapping.for_provider(provider)
        if vocabulary is None:
            raise ConfigurationError(f"No genre vocabulary configured for provider '{provider}'")

        matches: List[str] = []
        for term in terms:
            if not term.strip():
                continue
            if vocabulary.has_ids:
                entry, score = self.best_entry(term, vocabulary)
                value = entry.genre_id or ""
            else:
                entry, score = self.nearest_label(term, vocabulary)
                value = entry.name
            logger.debug("%s: genre '%s' -> '%s' (%.2f)", provider, term, entry.name, score)
            matches.append(value)
        return ",".join(matches)

    @staticmethod
    def best_entry(term: str, vocabulary: GenreVocabulary) -> Tuple[GenreEntry, float]:
        """Full scan: highest similarity wins, first seen wins ties, 1.0 stops the scan."""
        best = vocabulary.entries[0]
        best_score = -1.0
        for entry in vocabulary.entries:
            score = similarity(term, entry.name)
            if score == PERFECT_SCORE:
                return entry, score
            if score > best_score:
                best, best_score = entry, score
        return best, best_score

    @staticmethod
    def nearest_label(term: str, vocabulary: GenreVocabulary) -> Tuple[GenreEntry, float]:
        """Fuzzy top-1 nearest-neighbour search over a flat label list."""
        result = process.extractOne(
            term,
            vocabulary.names,
            scorer=Levenshtein.normalized_similarity,
            processor=_fold,
        )
        # The loader never produces an empty vocabulary.
        _, score, index = result
        return vocabulary.entries[index], score

__all__ = ["load_genre_mapping", "similarity", "GenreReconciler"]
