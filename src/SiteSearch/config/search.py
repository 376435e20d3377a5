"""Search settings: provider, credentials and per-search defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from SiteSearch.config.common import ConfigSection, check_non_empty
from SiteSearch.core.query import DEFAULT_LANGUAGE, DEFAULT_REGION
from SiteSearch.sources.registry import supported_source_names

MAX_RESULTS_LIMIT = 100


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Validated provider settings and search defaults.

    Attributes:
        provider: Registered provider name (serper / google_cse).
        max_results: Number of results requested per search.
        timeout: HTTP timeout in seconds.
        api_key_env: Environment variable holding the provider API key.
        api_key: API key read from ``api_key_env`` (may be empty).
        cse_id_env: Environment variable holding the Custom Search engine id.
        cse_id: Engine id read from ``cse_id_env`` (may be empty).
        region: Default region for searches that do not set one.
        language: Default language for searches that do not set one.
    """

    provider: str
    max_results: int
    timeout: float
    api_key_env: str
    api_key: str
    cse_id_env: str
    cse_id: str
    region: str
    language: str


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load the ``search`` section.

    Credentials never live in YAML: the section names environment variables
    and their values are read here.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = ConfigSection.from_root(raw, "search")
    api_key_env = section.get_str("api_key_env", "SERPER_API_KEY").strip()
    cse_id_env = section.get_str("cse_id_env", "GOOGLE_CSE_ID").strip()
    return SearchConfig(
        provider=section.get_str("provider").strip().lower(),
        max_results=section.get_int("max_results"),
        timeout=section.get_number("timeout", 30.0),
        api_key_env=api_key_env,
        api_key=_read_env(api_key_env),
        cse_id_env=cse_id_env,
        cse_id=_read_env(cse_id_env),
        region=section.get_str("region", DEFAULT_REGION).strip(),
        language=section.get_str("language", DEFAULT_LANGUAGE).strip(),
    )


def check_search(config: SearchConfig) -> None:
    """Validate provider name, limits and locale defaults.

    Missing credentials are not an error here; they are reported when the
    provider is built, so offline commands keep working without a key.
    """
    providers = supported_source_names()
    if config.provider not in providers:
        raise ValueError(f"search.provider has unknown provider: {config.provider} (expected one of {list(providers)})")
    if not 1 <= config.max_results <= MAX_RESULTS_LIMIT:
        raise ValueError(f"search.max_results must be between 1 and {MAX_RESULTS_LIMIT}")
    if config.timeout <= 0:
        raise ValueError("search.timeout must be positive")
    check_non_empty(config.api_key_env, "search.api_key_env")
    check_non_empty(config.region, "search.region")
    check_non_empty(config.language, "search.language")
    if config.provider == "google_cse":
        check_non_empty(config.cse_id_env, "search.cse_id_env")


def _read_env(env_name: str) -> str:
    if not env_name:
        return ""
    return os.getenv(env_name, "").strip()
