"""Provider result normalization.

Maps untyped provider records (``{title?, link?/url?, snippet?, date?}``)
into `SearchResult`. Records without an absolute URL are dropped.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Mapping
from urllib.parse import urlparse

from dateutil import parser as dt_parser

from SiteSearch.core.models import DEFAULT_SNIPPET, DEFAULT_TITLE, SearchResult

_URL_KEYS = ("link", "url")
_ALLOWED_SCHEMES = frozenset({"http", "https"})


def normalize_results(records: Iterable[Any]) -> list[SearchResult]:
    """Normalize raw provider records.

    Args:
        records: Provider records in upstream order.

    Returns:
        Results in input order, minus records lacking a usable URL.
    """
    results: list[SearchResult] = []
    if records is None:
        return results

    for record in records:
        if not isinstance(record, Mapping):
            continue
        url = _extract_url(record)
        if not url:
            continue
        results.append(
            SearchResult(
                title=_safe_str(record.get("title")) or DEFAULT_TITLE,
                url=url,
                snippet=_safe_str(record.get("snippet")) or DEFAULT_SNIPPET,
                position=len(results) + 1,
                published=_parse_date(record.get("date")),
            )
        )
    return results


def _extract_url(record: Mapping[str, Any]) -> str:
    """Return the first absolute http(s) URL among the link-like fields."""
    for key in _URL_KEYS:
        value = _safe_str(record.get(key))
        if value and _is_absolute_url(value):
            return value
    return ""


def _is_absolute_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme.lower() in _ALLOWED_SCHEMES and bool(parsed.netloc)


def _parse_date(value: Any) -> datetime | None:
    """Parse a provider date like ``Mar 3, 2024``; relative dates give None."""
    text = _safe_str(value)
    if not text:
        return None
    try:
        return dt_parser.parse(text)
    except (TypeError, ValueError, OverflowError):
        return None


def _safe_str(value: Any) -> str:
    """Convert scalar value to stripped string."""
    if isinstance(value, str):
        return value.strip()
    return ""
