"""Source registry and builders for search providers."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from SiteSearch.config import AppConfig
    from SiteSearch.services.search import SearchSource

SourceBuilder = Callable[["AppConfig"], "SearchSource"]


def build_source(source_name: str, *, config: AppConfig) -> SearchSource:
    """Build a search source instance from the registered provider name.

    Args:
        source_name: Provider identifier from ``search.provider``.
        config: Parsed application configuration.

    Returns:
        SearchSource: Initialized source implementation for the given name.

    Raises:
        ValueError: If ``source_name`` is not registered or its credentials
            are missing from the environment.
    """
    registry = _source_builders()
    builder = registry.get(source_name)
    if builder is None:
        raise ValueError(f"Unsupported provider in config.search.provider: {source_name}")
    return builder(config)


def supported_source_names() -> tuple[str, ...]:
    """Return all provider names that can be built by the registry.

    Returns:
        tuple[str, ...]: Provider names in registry order.
    """
    return tuple(_source_builders().keys())


def _source_builders() -> dict[str, SourceBuilder]:
    """Return source builder registry."""
    return {
        "serper": _build_serper_source,
        "google_cse": _build_google_cse_source,
    }


def _build_serper_source(config: AppConfig) -> SearchSource:
    """Build Serper source."""
    from SiteSearch.sources.serper.client import SerperApiClient
    from SiteSearch.sources.serper.source import SerperSource

    _require(config.search.api_key, config.search.api_key_env)
    return SerperSource(
        client=SerperApiClient(config.search.api_key, timeout=config.search.timeout),
    )


def _build_google_cse_source(config: AppConfig) -> SearchSource:
    """Build Google Custom Search source."""
    from SiteSearch.sources.google_cse.client import GoogleCseApiClient
    from SiteSearch.sources.google_cse.source import GoogleCseSource

    _require(config.search.api_key, config.search.api_key_env)
    _require(config.search.cse_id, config.search.cse_id_env)
    return GoogleCseSource(
        client=GoogleCseApiClient(
            config.search.api_key,
            config.search.cse_id,
            timeout=config.search.timeout,
        ),
    )


def _require(value: str, env_name: str) -> None:
    if not value:
        raise ValueError(
            f"{env_name} environment variable not set. "
            "Set it in your .env file or shell environment."
        )
