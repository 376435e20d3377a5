"""Storage settings for search history and saved searches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SiteSearch.config.common import ConfigSection, check_non_empty

DEFAULT_USER_ID = "local"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Storage configuration.

    Attributes:
        enabled: Whether searches are recorded and saved searches available.
        db_path: SQLite database file.
        user_id: Identity that owns history and saved searches.
    """

    enabled: bool
    db_path: str
    user_id: str


def load_storage(raw: Mapping[str, Any]) -> StorageConfig:
    section = ConfigSection.from_root(raw, "storage")
    return StorageConfig(
        enabled=section.get_bool("enabled"),
        db_path=section.get_str("db_path"),
        user_id=section.get_str("user_id", DEFAULT_USER_ID).strip(),
    )


def check_storage(config: StorageConfig) -> None:
    check_non_empty(config.db_path, "storage.db_path")
    check_non_empty(config.user_id, "storage.user_id")
