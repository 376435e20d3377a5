"""Output renderers for command results.

Provides the OutputWriter abstraction and console, JSON and CSV
implementations, plus a factory that builds writers from configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from SiteSearch.renderers.base import MultiOutputWriter, OutputWriter
from SiteSearch.renderers.console import ConsoleOutputWriter, render_text
from SiteSearch.renderers.csv import CsvFileWriter, render_csv, write_csv
from SiteSearch.renderers.json import JsonFileWriter, render_json

if TYPE_CHECKING:
    from SiteSearch.config import AppConfig


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Create output writer based on config.

    Raises:
        ValueError: If no known output format is configured.
    """
    writers: list[OutputWriter] = []
    if "console" in config.output.formats:
        writers.append(ConsoleOutputWriter())
    if "json" in config.output.formats:
        writers.append(JsonFileWriter(config.output.base_dir))
    if "csv" in config.output.formats:
        writers.append(CsvFileWriter(config.output.base_dir))

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "OutputWriter",
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "CsvFileWriter",
    "MultiOutputWriter",
    "render_csv",
    "render_json",
    "render_text",
    "write_csv",
    "create_output_writer",
]
