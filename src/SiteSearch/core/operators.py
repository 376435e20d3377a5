"""Per-field operator compilers.

Each compiler turns one constraint field into an `OperatorFragment`, or None
when the field is absent or blank. Compilers never raise on field content.

Query syntax (Google-style operators)
- site restriction -> site:<domain>
- all of           -> +t1 +t2
- any of           -> (t1 OR t2)
- exact phrase     -> "<phrase>"
- include          -> t1 t2
- exclude          -> -t1 -t2
- file type        -> filetype:<ext>
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from SiteSearch.core.terms import clean_text, split_terms


@dataclass(frozen=True, slots=True)
class OperatorFragment:
    """Compiled output of a single field.

    Attributes:
        query: Fragment appended to the query string.
        label: Operator label shown to the user.
        description: Fragment of the human-readable summary.
    """

    query: str
    label: str
    description: str


def compile_site(domain: str) -> OperatorFragment:
    """Compile the mandatory site restriction."""
    return OperatorFragment(
        query=f"site:{domain}",
        label=f"site:{domain}",
        description=f"domain: {domain}",
    )


def compile_all_of(value: Any) -> Optional[OperatorFragment]:
    terms = split_terms(value)
    if not terms:
        return None
    text = clean_text(value)
    return OperatorFragment(
        query=" ".join(f"+{term}" for term in terms),
        label=f"ALL OF: {text}",
        description=f"must include all: {text}",
    )


def compile_any_of(value: Any) -> Optional[OperatorFragment]:
    terms = split_terms(value)
    if not terms:
        return None
    text = clean_text(value)
    return OperatorFragment(
        query="(" + " OR ".join(terms) + ")",
        label=f"ANY OF: {text}",
        description=f"any of: {text}",
    )


def compile_exact_phrase(value: Any) -> Optional[OperatorFragment]:
    """Compile an exact phrase.

    The phrase keeps its inner whitespace. Double quotes inside the phrase are
    removed from the query fragment because the operator grammar has no way to
    escape them; the label and description keep the text as typed.
    """
    text = clean_text(value)
    phrase = text.replace('"', "").strip()
    if not phrase:
        return None
    return OperatorFragment(
        query=f'"{phrase}"',
        label=f'EXACT: "{text}"',
        description=f'exact phrase: "{text}"',
    )


def compile_include(value: Any) -> Optional[OperatorFragment]:
    terms = split_terms(value)
    if not terms:
        return None
    text = clean_text(value)
    return OperatorFragment(
        query=" ".join(terms),
        label=f"INCLUDE: {text}",
        description=f"include: {text}",
    )


def compile_exclude(value: Any) -> Optional[OperatorFragment]:
    terms = split_terms(value)
    if not terms:
        return None
    text = clean_text(value)
    return OperatorFragment(
        query=" ".join(f"-{term}" for term in terms),
        label=f"EXCLUDE: {text}",
        description=f"exclude: {text}",
    )


def compile_file_type(value: Any) -> Optional[OperatorFragment]:
    """Compile a file type filter. The value is a single token, not split."""
    text = clean_text(value)
    if not text:
        return None
    return OperatorFragment(
        query=f"filetype:{text}",
        label=f"FILETYPE: {text}",
        description=f"file type: {text}",
    )
