"""Logging settings read from the ``log`` section."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SiteSearch.config.common import ConfigSection, check_non_empty

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Logging behavior.

    Attributes:
        level: Console log level name.
        to_file: Whether each command also writes a log file.
        dir: Base directory for log files.
    """

    level: str
    to_file: bool
    dir: str


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    section = ConfigSection.from_root(raw, "log")
    return RuntimeConfig(
        level=section.get_str("level").strip().upper(),
        to_file=section.get_bool("to_file", False),
        dir=section.get_str("dir", "log"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    if config.level not in _LOG_LEVELS:
        raise ValueError(f"log.level must be one of {list(_LOG_LEVELS)}")
    check_non_empty(config.dir, "log.dir")
