"""Storage layer for SiteSearch.

Provides database management, search history and saved-search storage.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from SiteSearch.storage.db import DatabaseManager
from SiteSearch.storage.history import SearchHistoryStore
from SiteSearch.storage.migration import run_migrations
from SiteSearch.storage.saved import SavedSearchStore
from SiteSearch.utils.log import log

if TYPE_CHECKING:
    from SiteSearch.config import AppConfig


def create_storage(
    config: AppConfig,
) -> tuple[DatabaseManager | None, SearchHistoryStore | None, SavedSearchStore | None]:
    """Create database manager and storage components.

    Args:
        config: Application configuration containing storage settings.

    Returns:
        Tuple of (db_manager, history_store, saved_store). All three are None
        when storage is disabled.
    """
    if not config.storage.enabled:
        return None, None, None

    db_path = Path(config.storage.db_path)
    db_manager = DatabaseManager(db_path)
    log.info("Storage enabled: %s", db_path)
    return db_manager, SearchHistoryStore(db_manager), SavedSearchStore(db_manager)


__all__ = [
    "DatabaseManager",
    "SearchHistoryStore",
    "SavedSearchStore",
    "run_migrations",
    "create_storage",
]
