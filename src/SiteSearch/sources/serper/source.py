"""Serper source adapter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SiteSearch.sources.serper.client import SerperApiClient


@dataclass(slots=True)
class SerperSource:
    """Serper-backed source returning raw organic records."""

    client: SerperApiClient
    name: str = "serper"

    def search(
        self,
        query: str,
        *,
        params: Mapping[str, str],
        max_results: int,
    ) -> list[dict[str, Any]]:
        """Run a compiled query against Serper.

        Args:
            query: Compiled query string.
            params: Neutral auxiliary params.
            max_results: Maximum number of records requested.

        Returns:
            Raw organic records; normalization is left to the caller.
        """
        return self.client.fetch_organic(query=query, params=params, max_results=max_results)

    def close(self) -> None:
        """Close resources held by the Serper source adapter."""
        self.client.close()
