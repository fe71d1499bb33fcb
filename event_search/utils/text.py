"""Helpers for the comma-delimited free text accepted on the command line."""

from __future__ import annotations

from typing import Iterable, List

__all__ = ["split_terms", "unique_terms"]


def split_terms(text: str | None) -> List[str]:
    """Split ``"Rock, Jazz,,Pop "`` into ``["Rock", "Jazz", "Pop"]``."""
    if not text:
        return []
    return unique_terms(text.split(","))


def unique_terms(terms: Iterable[str]) -> List[str]:
    """Strip *terms*, drop blanks and duplicates, keep first-seen order."""
    seen = set()
    result: List[str] = []
    for term in terms:
        cleaned = term.strip()
        key = cleaned.casefold()
        if cleaned and key not in seen:
            seen.add(key)
            result.append(cleaned)
    return result
