"""Utility functions for the event search project.

Re-exports the date and text helpers so that imports like
`from ..utils import parse_date` work as expected.
"""

from .dates import (  # noqa: F401
    parse_date,
    parse_date_or_none,
    to_date_string,
    to_iso_instant,
    today,
)
from .text import split_terms, unique_terms  # noqa: F401

__all__ = [
    "parse_date",
    "parse_date_or_none",
    "to_date_string",
    "to_iso_instant",
    "today",
    "split_terms",
    "unique_terms",
]
