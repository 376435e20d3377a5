"""Versioned schema migrations for the SiteSearch SQLite database.

`DatabaseManager` calls `run_migrations` on every open. The applied version
lives in the single-row ``schema_version`` table; each pending migration runs
inside its own explicit transaction, so a failing statement leaves both the
schema and the recorded version as they were.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Sequence

from SiteSearch.utils.log import log

_EPOCH_NOW = "(CAST(strftime('%s','now') AS INTEGER))"


@dataclass(frozen=True)
class Migration:
    """One schema step.

    Attributes:
        version: Position in `MIGRATIONS`, starting at 1 without gaps.
        description: Short summary, logged when applied.
        statements: SQL statements executed in order.
    """

    version: int
    description: str
    statements: tuple[str, ...]


# Append-only. A released migration is never edited; add a new version instead.
MIGRATIONS: list[Migration] = [
    Migration(
        version=1,
        description="search history, stored results and saved searches",
        statements=(
            f"""
            CREATE TABLE IF NOT EXISTS search_history (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              user_id TEXT NOT NULL,
              domain TEXT NOT NULL,
              query TEXT NOT NULL,
              description TEXT NOT NULL,
              operators TEXT NOT NULL,
              params TEXT NOT NULL,
              result_count INTEGER NOT NULL DEFAULT 0,
              created_at INTEGER NOT NULL DEFAULT {_EPOCH_NOW}
            )
            """,
            f"""
            CREATE TABLE IF NOT EXISTS search_results (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              search_history_id INTEGER NOT NULL
                REFERENCES search_history(id) ON DELETE CASCADE,
              domain TEXT NOT NULL,
              keyword TEXT NOT NULL,
              title TEXT NOT NULL,
              url TEXT NOT NULL,
              snippet TEXT NOT NULL,
              created_at INTEGER NOT NULL DEFAULT {_EPOCH_NOW}
            )
            """,
            f"""
            CREATE TABLE IF NOT EXISTS saved_searches (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              user_id TEXT NOT NULL,
              name TEXT NOT NULL,
              constraints TEXT NOT NULL,
              created_at INTEGER NOT NULL DEFAULT {_EPOCH_NOW},
              updated_at INTEGER NOT NULL DEFAULT {_EPOCH_NOW},
              UNIQUE(user_id, name)
            )
            """,
            "CREATE INDEX IF NOT EXISTS idx_history_user_created ON search_history(user_id, created_at DESC)",
            "CREATE INDEX IF NOT EXISTS idx_results_history ON search_results(search_history_id)",
            "CREATE INDEX IF NOT EXISTS idx_saved_user_created ON saved_searches(user_id, created_at DESC)",
        ),
    ),
]


def run_migrations(conn: sqlite3.Connection) -> None:
    """Bring the database schema up to the newest migration.

    Raises:
        ValueError: If `MIGRATIONS` is not numbered 1..n without gaps.
        sqlite3.Error: If a statement fails; that migration is rolled back.
    """
    _check_numbering(MIGRATIONS)
    conn.execute("CREATE TABLE IF NOT EXISTS schema_version (id INTEGER PRIMARY KEY CHECK (id = 1), version INTEGER NOT NULL)")
    conn.commit()

    current = schema_version(conn)
    pending = [m for m in MIGRATIONS if m.version > current]
    if not pending:
        log.debug("Schema up to date (v%d)", current)
        return

    for migration in pending:
        _apply(conn, migration)
        log.info("Applied schema migration v%d: %s", migration.version, migration.description)


def schema_version(conn: sqlite3.Connection) -> int:
    """Return the applied schema version; 0 for a database never migrated."""
    row = conn.execute("SELECT version FROM schema_version WHERE id = 1").fetchone()
    return int(row[0]) if row else 0


def _check_numbering(migrations: Sequence[Migration]) -> None:
    for expected, migration in enumerate(migrations, start=1):
        if migration.version != expected:
            raise ValueError(
                f"MIGRATIONS must be numbered without gaps: expected v{expected}, "
                f"found v{migration.version} ({migration.description!r})"
            )


def _apply(conn: sqlite3.Connection, migration: Migration) -> None:
    # executescript() would COMMIT implicitly, so statements run one by one.
    conn.execute("BEGIN")
    try:
        for statement in migration.statements:
            conn.execute(statement)
        conn.execute(
            "INSERT OR REPLACE INTO schema_version (id, version) VALUES (1, ?)",
            (migration.version,),
        )
    except sqlite3.Error:
        conn.execute("ROLLBACK")
        raise
    conn.execute("COMMIT")
