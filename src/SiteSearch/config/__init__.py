"""Public configuration API for SiteSearch."""

from __future__ import annotations

from SiteSearch.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from SiteSearch.config.output import OutputConfig
from SiteSearch.config.runtime import RuntimeConfig
from SiteSearch.config.search import SearchConfig
from SiteSearch.config.storage import StorageConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AppConfig",
    "OutputConfig",
    "RuntimeConfig",
    "SearchConfig",
    "StorageConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
]
