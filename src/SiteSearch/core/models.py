from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

DEFAULT_TITLE = "No title"
DEFAULT_SNIPPET = "No snippet available"


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Provider-agnostic search result.

    This is the unified shape every provider payload is mapped to before it
    is rendered, exported or persisted.

    Attributes:
        title: Display title, never empty.
        url: Absolute URL of the result page.
        snippet: Display snippet, never empty.
        position: 1-based rank within the normalized batch.
        published: Publication date when the provider reports one.
    """

    title: str
    url: str
    snippet: str
    position: Optional[int] = None
    published: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class SearchRecord:
    """A persisted search with its results.

    Attributes:
        id: Row id in ``search_history``.
        user_id: Owner of the search.
        domain: Domain the search was restricted to.
        query: Compiled query sent upstream.
        description: Human-readable summary of the constraints.
        operators: Operator labels of the compiled query.
        params: Auxiliary request parameters.
        result_count: Number of normalized results stored.
        created_at: Creation time (UTC).
        results: Stored results, in their original order.
    """

    id: int
    user_id: str
    domain: str
    query: str
    description: str
    operators: Sequence[str]
    params: Mapping[str, str]
    result_count: int
    created_at: Optional[datetime]
    results: Sequence[SearchResult] = ()


@dataclass(frozen=True, slots=True)
class SavedSearch:
    """A named set of advanced-search constraints kept for reuse."""

    id: int
    user_id: str
    name: str
    constraints: Mapping[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
