"""Workflows composing the service layer into runnable operations."""

from .search_pipeline import build_coordinator, run_search  # noqa: F401

__all__ = ["build_coordinator", "run_search"]
