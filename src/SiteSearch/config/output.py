"""Output settings: which writers run and where files land."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SiteSearch.config.common import ConfigSection, check_non_empty

OUTPUT_FORMATS = ("console", "json", "csv")


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Output configuration.

    Attributes:
        base_dir: Directory receiving ``json/`` and ``csv/`` result files.
        formats: Enabled writers, lower-cased.
    """

    base_dir: str
    formats: tuple[str, ...]


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load the ``output`` section.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = ConfigSection.from_root(raw, "output")
    return OutputConfig(
        base_dir=section.get_str("base_dir"),
        formats=tuple(item.strip().lower() for item in section.get_str_list("formats")),
    )


def check_output(config: OutputConfig) -> None:
    check_non_empty(config.base_dir, "output.base_dir")
    if not config.formats:
        raise ValueError("output.formats must include at least one format")
    unknown = sorted(set(config.formats) - set(OUTPUT_FORMATS))
    if unknown:
        raise ValueError(f"output.formats has unknown formats: {unknown} (expected any of {list(OUTPUT_FORMATS)})")
