"""Google Custom Search source adapter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SiteSearch.sources.google_cse.client import GoogleCseApiClient


@dataclass(slots=True)
class GoogleCseSource:
    """Custom Search-backed source returning raw item records."""

    client: GoogleCseApiClient
    name: str = "google_cse"

    def search(
        self,
        query: str,
        *,
        params: Mapping[str, str],
        max_results: int,
    ) -> list[dict[str, Any]]:
        """Run a compiled query against the Custom Search API."""
        return self.client.fetch_items(query=query, params=params, max_results=max_results)

    def close(self) -> None:
        """Close resources held by the source adapter."""
        self.client.close()
