"""Search service layer: compile, fetch, normalize, record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Protocol, Sequence

from SiteSearch.core.compiler import compile_advanced_query, compile_basic_query
from SiteSearch.core.models import SearchResult
from SiteSearch.core.normalize import normalize_results
from SiteSearch.core.params import build_request_params, map_locale
from SiteSearch.core.query import (
    DEFAULT_LANGUAGE,
    DEFAULT_REGION,
    CompiledQuery,
    SearchConstraints,
    validate_domain,
    validate_keyword,
)
from SiteSearch.utils.log import log

if TYPE_CHECKING:
    from SiteSearch.storage.history import SearchHistoryStore


class SearchProviderError(RuntimeError):
    """Raised when the upstream provider request fails."""


class SearchSource(Protocol):
    """Protocol for an upstream search provider."""

    name: str

    def search(
        self,
        query: str,
        *,
        params: Mapping[str, str],
        max_results: int,
    ) -> Sequence[Mapping[str, Any]]:
        """Return raw provider records for a compiled query."""
        raise NotImplementedError

    def close(self) -> None:
        """Close resources held by source."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class SearchOutcome:
    """Result of one executed search.

    Attributes:
        domain: Domain the search was restricted to.
        compiled: Compiled query and its operator labels.
        params: Auxiliary request parameters sent with the query.
        results: Normalized results in provider order.
        history_id: Row id of the stored search, when it was persisted.
    """

    domain: str
    compiled: CompiledQuery
    params: Mapping[str, str]
    results: Sequence[SearchResult]
    history_id: int | None = None


@dataclass(slots=True)
class SiteSearchService:
    """Application service running domain-scoped searches.

    The provider and the optional history store are injected so the service
    holds no hidden global state.
    """

    source: SearchSource
    history_store: SearchHistoryStore | None = None
    region: str = DEFAULT_REGION
    language: str = DEFAULT_LANGUAGE

    def search_basic(
        self,
        domain: str,
        keyword: str,
        *,
        user_id: str | None = None,
        max_results: int = 10,
    ) -> SearchOutcome:
        """Search `domain` for a free-text keyword.

        Raises:
            InvalidDomainError: If the domain is malformed.
            InvalidKeywordError: If the keyword is blank or too long.
            SearchProviderError: If the provider request fails.
        """
        domain = validate_domain(domain)
        keyword = validate_keyword(keyword)
        compiled = compile_basic_query(domain, keyword)
        return self._execute(
            domain,
            compiled,
            map_locale(self.language, self.region),
            keyword=keyword,
            user_id=user_id,
            max_results=max_results,
        )

    def search_advanced(
        self,
        constraints: SearchConstraints,
        *,
        user_id: str | None = None,
        max_results: int = 10,
    ) -> SearchOutcome:
        """Search with the full set of advanced constraints.

        Raises:
            SearchProviderError: If the provider request fails.
        """
        compiled = compile_advanced_query(constraints)
        return self._execute(
            constraints.domain,
            compiled,
            build_request_params(constraints),
            keyword=compiled.description,
            user_id=user_id,
            max_results=max_results,
        )

    def close(self) -> None:
        """Close the underlying source."""
        self.source.close()

    def _execute(
        self,
        domain: str,
        compiled: CompiledQuery,
        params: Mapping[str, str],
        *,
        keyword: str,
        user_id: str | None,
        max_results: int,
    ) -> SearchOutcome:
        source_name = getattr(self.source, "name", "unknown")
        log.info("Searching: provider=%s query=%s", source_name, compiled.query)
        log.debug("Request params: %s", dict(params))
        try:
            records = list(self.source.search(compiled.query, params=params, max_results=max_results) or ())
        except Exception as error:  # noqa: BLE001 - wrap provider failure for the caller
            log.warning("Search provider failed: provider=%s error=%s", source_name, error)
            raise SearchProviderError(f"Search failed ({source_name}): {error}") from error

        results = normalize_results(records)
        dropped = len(records) - len(results)
        log.info("Search completed: provider=%s count=%d dropped=%d", source_name, len(results), dropped)

        history_id = None
        if self.history_store is not None and user_id:
            history_id = self.history_store.record(
                user_id=user_id,
                domain=domain,
                keyword=keyword,
                compiled=compiled,
                params=params,
                results=results,
            )

        return SearchOutcome(
            domain=domain,
            compiled=compiled,
            params=dict(params),
            results=tuple(results),
            history_id=history_id,
        )
