"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands to their
respective runners.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import click
from dotenv import load_dotenv

from SiteSearch.cli.commands import format_compiled, format_history, format_saved
from SiteSearch.cli.runner import CommandRunner
from SiteSearch.config import DEFAULT_CONFIG_PATH, AppConfig, load_config, load_config_with_defaults
from SiteSearch.core.compiler import compile_advanced_query
from SiteSearch.core.params import build_request_params
from SiteSearch.core.query import (
    DATE_RANGES,
    InvalidDomainError,
    InvalidKeywordError,
    SearchConstraints,
    validate_domain,
    validate_keyword,
)


def _constraint_options(func: Callable) -> Callable:
    """Attach the advanced-search constraint options to a command."""
    options = [
        click.option("--domain", required=True, help="Domain to search, e.g. docs.example.com."),
        click.option("--all-of", "all_of_terms", help="Terms that must all appear."),
        click.option("--any-of", "any_of_terms", help="Terms of which at least one must appear."),
        click.option("--exact", "exact_phrase", help="Exact phrase."),
        click.option("--include", "include_terms", help="Additional terms."),
        click.option("--exclude", "exclude_terms", help="Terms that must not appear."),
        click.option("--file-type", "file_type", help="File type, e.g. pdf."),
        click.option(
            "--date-range",
            type=click.Choice(DATE_RANGES, case_sensitive=False),
            default="any",
            show_default=True,
            help="Only results from the past day/week/month/year.",
        ),
        click.option("--language", help="Language code (defaults to search.language)."),
        click.option("--region", help="Region code (defaults to search.region)."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_constraints(cfg: AppConfig, **values: str | None) -> SearchConstraints:
    values["region"] = values.get("region") or cfg.search.region
    values["language"] = values.get("language") or cfg.search.language
    try:
        return SearchConstraints(**values)
    except InvalidDomainError as e:
        raise click.BadParameter(str(e), param_hint="--domain") from e


@click.group(help="SiteSearch: domain-scoped web search from the terminal.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file (merged onto the default config).",
)
@click.option("--user", "user_id", default=None, help="User id owning history and saved searches.")
@click.pass_context
def cli(ctx: click.Context, config_path: Path, user_id: str | None) -> None:
    """CLI entry group.

    Loads environment variables from a .env file before reading config.
    """
    load_dotenv()

    try:
        if DEFAULT_CONFIG_PATH.exists():
            cfg = load_config_with_defaults(config_path, DEFAULT_CONFIG_PATH)
        else:
            cfg = load_config(config_path)
    except (OSError, TypeError, ValueError) as e:
        raise click.ClickException(f"Invalid config {config_path}: {e}") from e
    ctx.obj = CommandRunner(cfg, user_id=user_id)


@cli.command("search")
@click.argument("domain")
@click.argument("keyword")
@click.pass_context
def search_cmd(ctx: click.Context, domain: str, keyword: str) -> None:
    """Search DOMAIN for KEYWORD."""
    try:
        domain = validate_domain(domain)
        keyword = validate_keyword(keyword)
    except (InvalidDomainError, InvalidKeywordError) as e:
        raise click.BadParameter(str(e)) from e
    runner: CommandRunner = ctx.obj
    runner.run_search(ctx.command.name, domain=domain, keyword=keyword)


@cli.command("advanced")
@_constraint_options
@click.option("--save", "save_as", default=None, help="Also save these constraints under a name.")
@click.pass_context
def advanced_cmd(ctx: click.Context, save_as: str | None, **values: str | None) -> None:
    """Search with operator-style constraints."""
    runner: CommandRunner = ctx.obj
    constraints = _build_constraints(runner.config, **values)
    runner.run_advanced(ctx.command.name, constraints=constraints, save_as=save_as)


@cli.command("compile")
@_constraint_options
@click.pass_context
def compile_cmd(ctx: click.Context, **values: str | None) -> None:
    """Print the compiled query without contacting the provider."""
    runner: CommandRunner = ctx.obj
    constraints = _build_constraints(runner.config, **values)
    compiled = compile_advanced_query(constraints)
    for line in format_compiled(compiled, build_request_params(constraints)):
        click.echo(line)


@cli.command("history")
@click.option("--limit", type=click.IntRange(min=1), default=20, show_default=True)
@click.pass_context
def history_cmd(ctx: click.Context, limit: int) -> None:
    """List recent searches."""
    runner: CommandRunner = ctx.obj
    runner.configure_logging(ctx.command.name)
    lines = format_history(runner.list_history(limit=limit))
    if not lines:
        click.echo("No searches recorded yet.")
    for line in lines:
        click.echo(line)


@cli.command("export")
@click.argument("history_id", type=int)
@click.argument("output", type=click.Path(path_type=Path, dir_okay=False))
@click.pass_context
def export_cmd(ctx: click.Context, history_id: int, output: Path) -> None:
    """Export the results of search HISTORY_ID to OUTPUT as CSV."""
    runner: CommandRunner = ctx.obj
    runner.configure_logging(ctx.command.name)
    path = runner.export_history(history_id, output)
    click.echo(f"Exported to {path}")


@cli.group("saved")
def saved_group() -> None:
    """Manage saved searches."""


@saved_group.command("list")
@click.pass_context
def saved_list_cmd(ctx: click.Context) -> None:
    runner: CommandRunner = ctx.obj
    runner.configure_logging("saved")
    lines = format_saved(runner.list_saved())
    if not lines:
        click.echo("No saved searches.")
    for line in lines:
        click.echo(line)


@saved_group.command("run")
@click.argument("name")
@click.pass_context
def saved_run_cmd(ctx: click.Context, name: str) -> None:
    """Re-run the saved search NAME."""
    runner: CommandRunner = ctx.obj
    runner.run_saved("saved", name=name)


@saved_group.command("delete")
@click.argument("name")
@click.pass_context
def saved_delete_cmd(ctx: click.Context, name: str) -> None:
    """Delete the saved search NAME."""
    runner: CommandRunner = ctx.obj
    runner.configure_logging("saved")
    if not runner.delete_saved(name):
        raise click.ClickException(f"No saved search named {name!r}")
    click.echo(f"Deleted {name}")
