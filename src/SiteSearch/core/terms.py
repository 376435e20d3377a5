"""Whitespace tokenization shared by the operator compilers."""

from __future__ import annotations

from typing import Any


def split_terms(value: Any) -> tuple[str, ...]:
    """Split a term list on runs of whitespace.

    Args:
        value: Raw field value. Anything that is not a string counts as absent.

    Returns:
        Non-empty tokens in input order. Empty when the field is absent.
    """
    if not isinstance(value, str):
        return ()
    return tuple(value.split())


def clean_text(value: Any) -> str:
    """Return a stripped string, or an empty string for non-string input."""
    if isinstance(value, str):
        return value.strip()
    return ""
