"""CLI package for SiteSearch command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from SiteSearch.cli.runner import CommandRunner
from SiteSearch.cli.ui import cli


def main() -> None:
    """Run SiteSearch CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
