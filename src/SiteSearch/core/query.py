from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

DATE_RANGES: tuple[str, ...] = ("any", "day", "week", "month", "year")
DEFAULT_DATE_RANGE = "any"
DEFAULT_REGION = "us"
DEFAULT_LANGUAGE = "en"
KEYWORD_MAX_LENGTH = 200

# One or more dot-separated labels followed by an alphabetic TLD.
_RE_DOMAIN = re.compile(
    r"^(?:[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?\.)+[A-Za-z]{2,}$"
)

# Accepted spellings for each constraint field when parsing loose mappings
# (saved searches, CLI payloads). First key wins.
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "all_of_terms": ("all_of_terms", "allOfTerms", "required_terms", "requiredTerms"),
    "any_of_terms": ("any_of_terms", "anyOfTerms", "any_terms", "anyTerms"),
    "exact_phrase": ("exact_phrase", "exactPhrase"),
    "include_terms": ("include_terms", "includeTerms"),
    "exclude_terms": ("exclude_terms", "excludeTerms"),
    "file_type": ("file_type", "fileType"),
    "date_range": ("date_range", "dateRange"),
    "language": ("language",),
    "region": ("region",),
}


class InvalidDomainError(ValueError):
    """Raised when a domain is not a bare host name such as ``example.com``."""


class InvalidKeywordError(ValueError):
    """Raised when a basic-search keyword is blank or too long."""


def validate_domain(domain: Any) -> str:
    """Validate a domain and return it stripped of surrounding whitespace.

    Args:
        domain: Raw domain value.

    Returns:
        The trimmed domain.

    Raises:
        InvalidDomainError: If the value is not a host-like string.
    """
    if not isinstance(domain, str):
        raise InvalidDomainError("Domain is required")
    value = domain.strip()
    if not value:
        raise InvalidDomainError("Domain is required")
    if not _RE_DOMAIN.match(value):
        raise InvalidDomainError(f"Please enter a valid domain (e.g., example.com): {value!r}")
    return value


def validate_keyword(keyword: Any) -> str:
    """Validate a basic-search keyword and return it trimmed.

    Raises:
        InvalidKeywordError: If the keyword is blank or longer than 200 chars.
    """
    value = keyword.strip() if isinstance(keyword, str) else ""
    if not value:
        raise InvalidKeywordError("Keywords are required")
    if len(value) > KEYWORD_MAX_LENGTH:
        raise InvalidKeywordError("Keywords too long")
    return value


@dataclass(frozen=True, slots=True)
class SearchConstraints:
    """Structured advanced-search input.

    Only `domain` is required. Every other field may be None or blank, and a
    blank value means the same thing as an absent one.

    Attributes:
        domain: Host to restrict results to, e.g. ``docs.example.com``.
        all_of_terms: Whitespace-separated terms that must all appear.
        any_of_terms: Whitespace-separated terms of which one must appear.
        exact_phrase: Phrase that must appear verbatim.
        include_terms: Whitespace-separated terms added without an operator.
        exclude_terms: Whitespace-separated terms that must not appear.
        file_type: File extension filter such as ``pdf``.
        date_range: One of any/day/week/month/year.
        language: Interface language code, e.g. ``en``.
        region: Geolocation code, e.g. ``us``.
    """

    domain: str
    all_of_terms: Optional[str] = None
    any_of_terms: Optional[str] = None
    exact_phrase: Optional[str] = None
    include_terms: Optional[str] = None
    exclude_terms: Optional[str] = None
    file_type: Optional[str] = None
    date_range: str = DEFAULT_DATE_RANGE
    language: Optional[str] = None
    region: str = DEFAULT_REGION

    def __post_init__(self) -> None:
        object.__setattr__(self, "domain", validate_domain(self.domain))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> SearchConstraints:
        """Build constraints from a loose mapping.

        Accepts snake_case keys as well as the camelCase keys used by web
        forms (``allOfTerms``, ``excludeTerms``...). Non-string values are
        ignored.

        Raises:
            InvalidDomainError: If the domain is missing or malformed.
        """
        values: dict[str, Any] = {}
        for field, aliases in _FIELD_ALIASES.items():
            for alias in aliases:
                value = raw.get(alias)
                if isinstance(value, str):
                    values[field] = value
                    break
        if not (values.get("date_range") or "").strip():
            values.pop("date_range", None)
        if not (values.get("region") or "").strip():
            values.pop("region", None)
        return cls(domain=raw.get("domain"), **values)

    def to_mapping(self) -> dict[str, str]:
        """Return the non-blank fields as a snake_case mapping."""
        out: dict[str, str] = {"domain": self.domain}
        for field in _FIELD_ALIASES:
            value = getattr(self, field)
            if isinstance(value, str) and value.strip():
                out[field] = value
        return out


@dataclass(frozen=True, slots=True)
class CompiledQuery:
    """Upstream-ready query plus the labels shown to the user.

    Attributes:
        query: Compiled query string, always starting with ``site:<domain>``.
        operators: One label per field that contributed a fragment.
        description: Comma-joined human-readable summary.
    """

    query: str
    operators: Sequence[str]
    description: str
