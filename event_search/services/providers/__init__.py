"""Provider adapters and the registry that builds them from settings."""

from __future__ import annotations

from typing import Dict

import requests

from ...config import Settings
from .base import ProviderAdapter, ProviderQuery  # noqa: F401
from .skiddle import SkiddleAdapter  # noqa: F401
from .ticketmaster import TicketmasterAdapter  # noqa: F401


def build_adapters(
    settings: Settings,
    session: requests.Session | None = None,
) -> Dict[str, ProviderAdapter]:
    """Instantiate every known adapter, keyed by provider identifier."""
    adapters = [
        TicketmasterAdapter(
            settings.ticketmaster_api_key,
            session=session,
            timeout=settings.request_timeout,
            page_size=settings.ticketmaster_page_size,
            max_pages=settings.ticketmaster_max_pages,
        ),
        SkiddleAdapter(
            settings.skiddle_api_key,
            session=session,
            timeout=settings.request_timeout,
            radius=settings.skiddle_radius,
        ),
    ]
    return {adapter.name: adapter for adapter in adapters}

__all__ = [
    "ProviderAdapter",
    "ProviderQuery",
    "TicketmasterAdapter",
    "SkiddleAdapter",
    "build_adapters",
]
