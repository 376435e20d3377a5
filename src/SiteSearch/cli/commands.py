"""Command implementations for the SiteSearch CLI.

Encapsulates the business logic of each command, separated from CLI
parameter handling and output formatting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from SiteSearch.core.models import SavedSearch, SearchRecord
from SiteSearch.core.query import CompiledQuery, SearchConstraints
from SiteSearch.renderers import OutputWriter
from SiteSearch.services.search import SearchOutcome, SiteSearchService
from SiteSearch.storage.saved import SavedSearchStore
from SiteSearch.utils.log import log


@dataclass(slots=True)
class SearchCommand:
    """Runs one search and hands the outcome to the output writer.

    Optionally stores the advanced constraints under a name so the search can
    be re-run later.
    """

    search_service: SiteSearchService
    output_writer: OutputWriter
    user_id: str
    max_results: int
    saved_store: SavedSearchStore | None = None

    def run_basic(self, domain: str, keyword: str) -> SearchOutcome:
        outcome = self.search_service.search_basic(
            domain,
            keyword,
            user_id=self.user_id,
            max_results=self.max_results,
        )
        self.output_writer.write_search_result(outcome)
        return outcome

    def run_advanced(self, constraints: SearchConstraints, *, save_as: str | None = None) -> SearchOutcome:
        """Execute an advanced search, saving the constraints first if asked.

        Raises:
            ValueError: If `save_as` is given but storage is disabled, or the
                name is already taken.
        """
        if save_as:
            if self.saved_store is None:
                raise ValueError("Saving searches requires storage.enabled=true")
            self.saved_store.create(self.user_id, save_as, constraints)
            log.info("Saved search as %r", save_as)

        outcome = self.search_service.search_advanced(
            constraints,
            user_id=self.user_id,
            max_results=self.max_results,
        )
        self.output_writer.write_search_result(outcome)
        return outcome


def format_compiled(compiled: CompiledQuery, params: Mapping[str, str]) -> list[str]:
    """Format a compiled query and its request parameters for display."""
    lines = [f"Query: {compiled.query}", "Operators:"]
    lines.extend(f"  - {label}" for label in compiled.operators)
    lines.append(f"Description: {compiled.description}")
    if params:
        rendered = ", ".join(f"{key}={params[key]}" for key in sorted(params))
        lines.append(f"Params: {rendered}")
    return lines


def format_history(records: Iterable[SearchRecord]) -> list[str]:
    """One line per stored search, newest first."""
    lines: list[str] = []
    for record in records:
        when = record.created_at.strftime("%Y-%m-%d %H:%M") if record.created_at else "-"
        lines.append(f"[{record.id}] {when}  {record.domain}  {record.description}  ({record.result_count} results)")
    return lines


def format_saved(saved: Iterable[SavedSearch]) -> list[str]:
    lines: list[str] = []
    for item in saved:
        fields = ", ".join(f"{key}={value}" for key, value in item.constraints.items())
        lines.append(f"{item.name}: {fields}")
    return lines
