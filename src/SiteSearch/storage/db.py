"""SQLite connection ownership."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from SiteSearch.storage.migration import run_migrations
from SiteSearch.utils.log import log


class DatabaseManager:
    """Owns one SQLite connection with the schema migrated to latest.

    Callers construct the manager and hand it to each store that needs it;
    there is no shared module-level instance. Usable as a context manager,
    which closes the connection on exit.
    """

    def __init__(self, db_path: Path | str) -> None:
        """Open `db_path` (creating parent directories) and migrate it.

        Raises:
            OSError: If the parent directory cannot be created.
            sqlite3.Error: If the database cannot be opened or migrated.
        """
        self.db_path = Path(db_path)
        self.conn: sqlite3.Connection | None = connect(self.db_path)
        run_migrations(self.conn)

    def get_connection(self) -> sqlite3.Connection:
        """Return the open connection.

        Raises:
            RuntimeError: If the manager was already closed.
        """
        if self.conn is None:
            raise RuntimeError(f"Database {self.db_path} is closed")
        return self.conn

    def close(self) -> None:
        if self.conn is None:
            return
        self.conn.close()
        self.conn = None
        log.debug("Closed database %s", self.db_path)

    def __enter__(self) -> DatabaseManager:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def connect(db_path: Path) -> sqlite3.Connection:
    """Open a connection with foreign-key enforcement turned on."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA foreign_keys = ON")
    return conn
