"""Centralised configuration for event_search.

Environment variables are loaded once and all related constants are
grouped by service for easier maintenance. Components never read these
constants directly at call time; they receive a :class:`Settings` object
at construction.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Load environment variables from `.env` (if present)
# ---------------------------------------------------------------------------
load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# ---------------------------------------------------------------------------
# Core credentials (from environment)
# ---------------------------------------------------------------------------
TICKETMASTER_API_KEY: str | None = os.getenv("TICKETMASTER_API_KEY")
SKIDDLE_API_KEY: str | None = os.getenv("SKIDDLE_API_KEY")
OPENCAGE_API_KEY: str | None = os.getenv("OPENCAGE_API_KEY")
MONGODB_URI: str | None = os.getenv("MONGODB_URI")

# ---------------------------------------------------------------------------
# Provider settings
# ---------------------------------------------------------------------------
REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))
TICKETMASTER_PAGE_SIZE: int = int(os.getenv("TICKETMASTER_PAGE_SIZE", "100"))
TICKETMASTER_MAX_PAGES: int = int(os.getenv("TICKETMASTER_MAX_PAGES", "5"))
# miles around each resolved city
SKIDDLE_RADIUS: int = int(os.getenv("SKIDDLE_RADIUS", "8"))

# ---------------------------------------------------------------------------
# Search behaviour
# ---------------------------------------------------------------------------
STRICT_DATE_VALIDATION: bool = _env_bool("STRICT_DATE_VALIDATION")
GENRES_PATH: Path = Path(
    os.getenv("GENRES_PATH", str(Path(__file__).parent / "data" / "genres.json"))
)

# ---------------------------------------------------------------------------
# Calendar storage
# ---------------------------------------------------------------------------
MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "events_cli")
CALENDAR_COLLECTION: str = os.getenv("CALENDAR_COLLECTION", "calendar")

# ---------------------------------------------------------------------------
# Miscellaneous
# ---------------------------------------------------------------------------
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable snapshot of the configuration used by one process."""

    ticketmaster_api_key: str | None = TICKETMASTER_API_KEY
    skiddle_api_key: str | None = SKIDDLE_API_KEY
    opencage_api_key: str | None = OPENCAGE_API_KEY
    request_timeout: float = REQUEST_TIMEOUT_SECONDS
    ticketmaster_page_size: int = TICKETMASTER_PAGE_SIZE
    ticketmaster_max_pages: int = TICKETMASTER_MAX_PAGES
    skiddle_radius: int = SKIDDLE_RADIUS
    strict_date_validation: bool = STRICT_DATE_VALIDATION
    genres_path: Path = GENRES_PATH


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide :class:`Settings` singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


# ---------------------------------------------------------------------------
# Re-exported names
# ---------------------------------------------------------------------------
__all__ = [
    # credentials
    "TICKETMASTER_API_KEY",
    "SKIDDLE_API_KEY",
    "OPENCAGE_API_KEY",
    "MONGODB_URI",
    # providers
    "REQUEST_TIMEOUT_SECONDS",
    "TICKETMASTER_PAGE_SIZE",
    "TICKETMASTER_MAX_PAGES",
    "SKIDDLE_RADIUS",
    # search
    "STRICT_DATE_VALIDATION",
    "GENRES_PATH",
    # storage
    "MONGODB_DATABASE",
    "CALENDAR_COLLECTION",
    # misc
    "LOG_LEVEL",
    "Settings",
    "get_settings",
]
