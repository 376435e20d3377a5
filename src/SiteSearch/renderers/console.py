"""Console text output renderers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from SiteSearch.core.models import SearchResult
from SiteSearch.renderers.base import OutputWriter
from SiteSearch.utils.log import log

if TYPE_CHECKING:
    from SiteSearch.services.search import SearchOutcome


def render_text(results: Iterable[SearchResult]) -> str:
    """Render results into a numbered, human-readable text block."""
    lines: list[str] = []
    for idx, result in enumerate(results, start=1):
        lines.append(f"{idx}. {result.title}")
        lines.append(f"   {result.url}")
        if result.published:
            lines.append(f"   Published: {result.published.strftime('%Y-%m-%d')}")
        lines.append(f"   {result.snippet}")
        lines.append("")
    if not lines:
        return "No results found.\n"
    return "\n".join(lines).rstrip() + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def write_search_result(self, outcome: SearchOutcome) -> None:
        log.info("Query: %s", outcome.compiled.query)
        log.info("Operators: %s", " | ".join(outcome.compiled.operators))
        log.info("Description: %s", outcome.compiled.description)
        for line in render_text(outcome.results).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""
