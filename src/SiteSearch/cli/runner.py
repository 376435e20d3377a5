"""Command runner for coordinating CLI execution.

Manages component lifecycle, resource cleanup, logging configuration, and
error handling for command execution.
"""

from __future__ import annotations

from pathlib import Path

import click

from SiteSearch.cli.commands import SearchCommand
from SiteSearch.config import AppConfig
from SiteSearch.core.models import SavedSearch, SearchRecord
from SiteSearch.core.query import SearchConstraints
from SiteSearch.renderers import create_output_writer, write_csv
from SiteSearch.services import create_search_service
from SiteSearch.storage import create_storage
from SiteSearch.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management.

    Handles logging configuration, component creation, database lifetime
    and error handling for CLI commands.
    """

    def __init__(self, config: AppConfig, *, user_id: str | None = None) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
            user_id: Overrides ``storage.user_id`` when given.
        """
        self.config = config
        self.user_id = user_id or config.storage.user_id

    def run_search(self, action: str, *, domain: str, keyword: str) -> None:
        """Execute a basic domain + keyword search.

        Raises:
            click.Abort: When the search fails.
        """
        self._run(action, lambda command: command.run_basic(domain, keyword))

    def run_advanced(self, action: str, *, constraints: SearchConstraints, save_as: str | None = None) -> None:
        """Execute an advanced search, optionally saving its constraints.

        Raises:
            click.Abort: When the search fails.
        """
        self._run(action, lambda command: command.run_advanced(constraints, save_as=save_as))

    def run_saved(self, action: str, *, name: str) -> None:
        """Re-run a saved search by name.

        Raises:
            click.Abort: When the saved search is missing or the search fails.
        """
        def execute(command: SearchCommand) -> None:
            assert command.saved_store is not None
            saved = command.saved_store.get_by_name(self.user_id, name)
            if saved is None:
                raise ValueError(f"No saved search named {name!r}")
            command.run_advanced(SearchConstraints.from_mapping(saved.constraints))

        self._run(action, execute, require_storage=True)

    def list_history(self, *, limit: int | None = None) -> list[SearchRecord]:
        """Return the user's stored searches, newest first."""
        with self._open_storage() as (history_store, _):
            return history_store.list_for_user(self.user_id, limit=limit)

    def export_history(self, history_id: int, output: Path) -> Path:
        """Export one stored search's results to CSV.

        Raises:
            click.ClickException: If the search does not exist for the user.
        """
        with self._open_storage() as (history_store, _):
            record = history_store.get(history_id, self.user_id)
        if record is None:
            raise click.ClickException(f"No search with id {history_id}")
        path = write_csv(record.results, output)
        log.info("Exported %d results to %s", len(record.results), path)
        return path

    def list_saved(self) -> list[SavedSearch]:
        with self._open_storage() as (_, saved_store):
            return saved_store.list_for_user(self.user_id)

    def delete_saved(self, name: str) -> bool:
        with self._open_storage() as (_, saved_store):
            saved = saved_store.get_by_name(self.user_id, name)
            if saved is None:
                return False
            return saved_store.delete(saved.id, self.user_id)

    def configure_logging(self, action: str) -> None:
        log_path = configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        if log_path is not None:
            log.debug("Logging to %s", log_path)

    def _run(self, action, execute, *, require_storage: bool = False) -> None:
        self.configure_logging(action)
        db_manager = None
        search_service = None
        try:
            db_manager, history_store, saved_store = create_storage(self.config)
            if require_storage and saved_store is None:
                raise ValueError("This command requires storage.enabled=true")

            search_service = create_search_service(self.config, history_store=history_store)
            output_writer = create_output_writer(self.config)
            command = SearchCommand(
                search_service=search_service,
                output_writer=output_writer,
                user_id=self.user_id,
                max_results=self.config.search.max_results,
                saved_store=saved_store,
            )

            execute(command)
            output_writer.finalize(action)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action, e)
            raise click.Abort from e
        finally:
            if search_service is not None:
                search_service.close()
            if db_manager is not None:
                db_manager.close()

    def _open_storage(self) -> _StorageSession:
        if not self.config.storage.enabled:
            raise click.ClickException("This command requires storage.enabled=true")
        return _StorageSession(self.config)


class _StorageSession:
    """Context manager yielding (history_store, saved_store) and closing the DB."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._db_manager = None

    def __enter__(self):
        self._db_manager, history_store, saved_store = create_storage(self._config)
        return history_store, saved_store

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._db_manager is not None:
            self._db_manager.close()
