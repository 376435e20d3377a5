"""Query assembler.

Compiles `SearchConstraints` into a single `CompiledQuery`. Fragment order is
fixed by `_FIELD_COMPILERS`, so the same constraints always produce the same
query string, operator list and description.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from SiteSearch.core.operators import (
    OperatorFragment,
    compile_all_of,
    compile_any_of,
    compile_exact_phrase,
    compile_exclude,
    compile_file_type,
    compile_include,
    compile_site,
)
from SiteSearch.core.query import CompiledQuery, SearchConstraints, validate_domain

FieldCompiler = Callable[[Any], Optional[OperatorFragment]]

_FIELD_COMPILERS: tuple[tuple[str, FieldCompiler], ...] = (
    ("all_of_terms", compile_all_of),
    ("any_of_terms", compile_any_of),
    ("exact_phrase", compile_exact_phrase),
    ("include_terms", compile_include),
    ("exclude_terms", compile_exclude),
    ("file_type", compile_file_type),
)


def compile_basic_query(domain: str, keyword: str) -> CompiledQuery:
    """Compile a domain + keyword search.

    Args:
        domain: Host to restrict results to.
        keyword: Free-text keyword appended after the site restriction.

    Returns:
        Compiled query with the site restriction as its only operator.

    Raises:
        InvalidDomainError: If the domain is malformed.
    """
    domain = validate_domain(domain)
    keyword = keyword.strip() if isinstance(keyword, str) else ""
    site = compile_site(domain)
    query = f"{site.query} {keyword}" if keyword else site.query
    return CompiledQuery(
        query=query,
        operators=(site.label,),
        description=f'Searching {domain} for "{keyword}"',
    )


def compile_advanced_query(constraints: SearchConstraints) -> CompiledQuery:
    """Compile every present field of `constraints` into one query.

    The site restriction always comes first, followed by all-of, any-of,
    exact phrase, include, exclude and file type fragments.

    Args:
        constraints: Validated advanced-search constraints.

    Returns:
        Compiled query, operator labels and description.
    """
    fragments = [compile_site(constraints.domain)]
    for field, compiler in _FIELD_COMPILERS:
        fragment = compiler(getattr(constraints, field))
        if fragment is not None:
            fragments.append(fragment)

    return CompiledQuery(
        query=" ".join(f.query for f in fragments),
        operators=tuple(f.label for f in fragments),
        description=", ".join(f.description for f in fragments),
    )
