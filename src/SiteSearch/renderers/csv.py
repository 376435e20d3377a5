"""CSV export of search results.

Columns are ``Title,URL,Snippet``; every field is quoted so snippets with
commas, quotes or newlines survive spreadsheet import.
"""

from __future__ import annotations

import csv
import io
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from SiteSearch.core.models import SearchResult
from SiteSearch.renderers.base import OutputWriter
from SiteSearch.utils.log import log

if TYPE_CHECKING:
    from SiteSearch.services.search import SearchOutcome

CSV_HEADER = ("Title", "URL", "Snippet")


def render_csv(results: Iterable[SearchResult]) -> str:
    """Render results as CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for result in results:
        writer.writerow((result.title, result.url, result.snippet))
    return buffer.getvalue()


def write_csv(results: Iterable[SearchResult], path: str | Path) -> Path:
    """Write results to `path` as CSV, creating parent directories."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_csv(results), encoding="utf-8")
    return output_path


class CsvFileWriter(OutputWriter):
    """Write one CSV file per search on finalize."""

    def __init__(self, base_dir: str) -> None:
        self.output_dir = Path(base_dir) / "csv"
        self.outcomes: list[SearchOutcome] = []

    def write_search_result(self, outcome: SearchOutcome) -> None:
        self.outcomes.append(outcome)

    def finalize(self, action: str) -> None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        for idx, outcome in enumerate(self.outcomes, start=1):
            suffix = f"_{idx}" if len(self.outcomes) > 1 else ""
            filename = f"{action}_{outcome.domain}_{timestamp}{suffix}.csv"
            output_path = write_csv(outcome.results, self.output_dir / filename)
            log.info("CSV saved to %s", output_path)
