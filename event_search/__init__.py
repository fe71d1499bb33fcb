"""Top-level package for the event-search project.

This package exposes the public run_search() helper so callers can do
`python -m event_search search ...` or
`from event_search import run_search; run_search(request)`.
"""

from importlib import metadata as _metadata

try:
    __version__: str = _metadata.version("event-search")
except _metadata.PackageNotFoundError:  # pragma: no cover – running from source
    __version__ = "0.0.0"

from .models import SearchRequest  # convenience re-export
from .workflows.search_pipeline import run_search  # convenience re-export

__all__ = ["run_search", "SearchRequest", "__version__"]
