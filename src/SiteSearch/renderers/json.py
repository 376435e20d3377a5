"""JSON output renderers.

Accumulates search outcomes and writes them as one JSON document.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable

from SiteSearch.core.models import SearchResult
from SiteSearch.renderers.base import OutputWriter
from SiteSearch.utils.log import log

if TYPE_CHECKING:
    from SiteSearch.services.search import SearchOutcome


def render_json(results: Iterable[SearchResult]) -> list[dict[str, Any]]:
    """Render results into JSON-serializable Python objects."""
    out: list[dict[str, Any]] = []
    for result in results:
        item: dict[str, Any] = {
            "title": result.title,
            "url": result.url,
            "snippet": result.snippet,
        }
        if result.position is not None:
            item["position"] = result.position
        if result.published is not None:
            item["published"] = result.published.date().isoformat()
        out.append(item)
    return out


def render_outcome(outcome: SearchOutcome) -> dict[str, Any]:
    """Render one search outcome including its compiled query."""
    return {
        "domain": outcome.domain,
        "query": outcome.compiled.query,
        "operators": list(outcome.compiled.operators),
        "description": outcome.compiled.description,
        "params": dict(outcome.params),
        "results": render_json(outcome.results),
    }


class JsonFileWriter(OutputWriter):
    """Accumulate results and write to JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        self.output_dir = Path(base_dir) / "json"
        self.all_results: list[dict[str, Any]] = []

    def write_search_result(self, outcome: SearchOutcome) -> None:
        self.all_results.append(render_outcome(outcome))

    def finalize(self, action: str) -> None:
        """Write accumulated results to ``<base_dir>/json/<action>_<ts>.json``."""
        payload = json.dumps(self.all_results, ensure_ascii=False, indent=2)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = self.output_dir / f"{action}_{timestamp}.json"
        output_path.write_text(payload, encoding="utf-8")
        log.info("JSON saved to %s", output_path)
