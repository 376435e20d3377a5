"""Auxiliary request parameters derived from constraints.

Keys are provider-neutral; each provider client maps them to its own wire
names.

- time_range: single-letter token (d/w/m/y), omitted for "any"
- region:     geolocation code, defaults to "us"
- language:   interface language code, defaults to "en"
"""

from __future__ import annotations

from typing import Any

from SiteSearch.core.query import DEFAULT_LANGUAGE, DEFAULT_REGION, SearchConstraints
from SiteSearch.core.terms import clean_text

_TIMED_RANGES = frozenset({"day", "week", "month", "year"})


def map_date_range(date_range: Any) -> dict[str, str]:
    """Map a date range to a time-filter parameter.

    Args:
        date_range: One of any/day/week/month/year. Unknown values act as "any".

    Returns:
        ``{"time_range": <first letter>}`` for a timed range, else ``{}``.
    """
    value = clean_text(date_range).lower()
    if value not in _TIMED_RANGES:
        return {}
    return {"time_range": value[0]}


def map_locale(language: Any = None, region: Any = None) -> dict[str, str]:
    """Map language and region selections to request parameters.

    Values are passed through unvalidated; blank values fall back to defaults.
    """
    return {
        "region": clean_text(region) or DEFAULT_REGION,
        "language": clean_text(language) or DEFAULT_LANGUAGE,
    }


def build_request_params(constraints: SearchConstraints) -> dict[str, str]:
    """Combine the date-range and locale parameters for one search."""
    params = map_locale(constraints.language, constraints.region)
    params.update(map_date_range(constraints.date_range))
    return params
