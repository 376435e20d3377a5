"""Root configuration: YAML loading, default layering and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from SiteSearch.config.output import OutputConfig, check_output, load_output
from SiteSearch.config.runtime import RuntimeConfig, check_runtime, load_runtime
from SiteSearch.config.search import SearchConfig, check_search, load_search
from SiteSearch.config.storage import StorageConfig, check_storage, load_storage

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration, one attribute per YAML section."""

    runtime: RuntimeConfig
    search: SearchConfig
    output: OutputConfig
    storage: StorageConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Load and validate every section of a parsed YAML mapping.

    Raises:
        TypeError: If a value has the wrong type; the message names the key.
        ValueError: If a value is missing or invalid; the message names the key.
    """
    config = AppConfig(
        runtime=load_runtime(raw),
        search=load_search(raw),
        output=load_output(raw),
        storage=load_storage(raw),
    )
    check_runtime(config.runtime)
    check_search(config.search)
    check_output(config.output)
    check_storage(config.storage)
    return config


def load_config(path: Path) -> AppConfig:
    """Load a single YAML file as the complete configuration."""
    return parse_config_dict(_read_yaml(path))


def load_config_with_defaults(config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load `config_path` deep-merged onto the defaults in `default_path`.

    Only the keys present in the override replace defaults; nested sections
    are merged key by key.
    """
    base = _read_yaml(default_path)
    if Path(config_path).resolve() == Path(default_path).resolve():
        return parse_config_dict(base)
    return parse_config_dict(merge_config_dicts(base, _read_yaml(config_path)))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse YAML text; an empty document is an empty mapping.

    Raises:
        ValueError: If the document root is not a mapping.
    """
    data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(current, value)
        else:
            merged[key] = value
    return merged


def _read_yaml(path: Path) -> dict[str, Any]:
    return parse_yaml(Path(path).read_text(encoding="utf-8"))
