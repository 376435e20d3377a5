"""Search service layer for SiteSearch.

Provides the search orchestration service and a factory that wires it to
the configured provider.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from SiteSearch.services.search import SearchOutcome, SearchProviderError, SearchSource, SiteSearchService
from SiteSearch.sources.registry import build_source

if TYPE_CHECKING:
    from SiteSearch.config import AppConfig
    from SiteSearch.storage.history import SearchHistoryStore


def create_search_service(
    config: AppConfig,
    history_store: SearchHistoryStore | None = None,
) -> SiteSearchService:
    """Create a search service backed by the configured provider.

    Args:
        config: Application configuration containing provider settings.
        history_store: Optional store that records executed searches.

    Returns:
        Configured SiteSearchService instance.
    """
    source = build_source(config.search.provider, config=config)
    return SiteSearchService(
        source=source,
        history_store=history_store,
        region=config.search.region,
        language=config.search.language,
    )


__all__ = [
    "SearchOutcome",
    "SearchProviderError",
    "SearchSource",
    "SiteSearchService",
    "create_search_service",
]
