"""Tests for schema migration mechanism.

Covers:
  1. fresh database   - all tables created, schema_version written
  2. up to date       - second run executes no DDL
  3. new migration    - v2 applied to an existing DB, old data intact
  4. broken migration - transaction rolled back, version unchanged
Plus: version-gap validation raises ValueError at startup.
"""

import sqlite3
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

import SiteSearch.storage.migration as migration_module
from SiteSearch.storage.migration import MIGRATIONS, Migration, run_migrations


def _connect(path: Path) -> sqlite3.Connection:
    return sqlite3.connect(str(path))


def _current_version(conn: sqlite3.Connection) -> int:
    row = conn.execute(
        "SELECT version FROM schema_version WHERE id = 1"
    ).fetchone()
    return row[0] if row else 0


def _table_names(conn: sqlite3.Connection) -> set[str]:
    return {
        row[0]
        for row in conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ).fetchall()
    }


_LATEST_VERSION = max(m.version for m in MIGRATIONS)


class TestFreshDatabase(unittest.TestCase):
    """First run on a database file that does not yet exist."""

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self._conn = _connect(Path(self._tmpdir.name) / "sitesearch.db")

    def tearDown(self):
        self._conn.close()
        self._tmpdir.cleanup()

    def test_schema_version_equals_latest(self):
        run_migrations(self._conn)
        self.assertEqual(_current_version(self._conn), _LATEST_VERSION)

    def test_main_tables_created(self):
        run_migrations(self._conn)
        tables = _table_names(self._conn)
        for name in ("search_history", "search_results", "saved_searches", "schema_version"):
            with self.subTest(table=name):
                self.assertIn(name, tables)


class TestAlreadyUpToDate(unittest.TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self._conn = _connect(Path(self._tmpdir.name) / "sitesearch.db")
        run_migrations(self._conn)

    def tearDown(self):
        self._conn.close()
        self._tmpdir.cleanup()

    def test_version_unchanged_on_second_run(self):
        version_before = _current_version(self._conn)
        run_migrations(self._conn)
        self.assertEqual(_current_version(self._conn), version_before)

    def test_no_new_tables_on_second_run(self):
        tables_before = _table_names(self._conn)
        run_migrations(self._conn)
        self.assertEqual(_table_names(self._conn), tables_before)


class TestNewMigration(unittest.TestCase):
    """Simulated v2 migration applied to a v1 database."""

    _V2 = Migration(
        version=2,
        description="Add note column to saved_searches",
        statements=("ALTER TABLE saved_searches ADD COLUMN note TEXT",),
    )

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self._conn = _connect(Path(self._tmpdir.name) / "sitesearch.db")
        run_migrations(self._conn)
        self._conn.execute(
            "INSERT INTO saved_searches (user_id, name, constraints) VALUES (?, ?, ?)",
            ("local", "docs", '{"domain": "example.com"}'),
        )
        self._conn.commit()

    def tearDown(self):
        self._conn.close()
        self._tmpdir.cleanup()

    def test_version_advances_to_v2(self):
        with patch.object(migration_module, "MIGRATIONS", list(MIGRATIONS) + [self._V2]):
            run_migrations(self._conn)
        self.assertEqual(_current_version(self._conn), 2)

    def test_new_column_exists_and_data_kept(self):
        with patch.object(migration_module, "MIGRATIONS", list(MIGRATIONS) + [self._V2]):
            run_migrations(self._conn)
        row = self._conn.execute(
            "SELECT name, note FROM saved_searches WHERE user_id = 'local'"
        ).fetchone()
        self.assertEqual(row[0], "docs")
        self.assertIsNone(row[1])


class TestRollbackOnError(unittest.TestCase):
    """Bad migration SQL raises; the version number must not change."""

    _BAD_V2 = Migration(
        version=2,
        description="Intentionally broken migration",
        statements=("CREATE TABLE extra (id INTEGER)", "THIS IS NOT VALID SQL"),
    )

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self._conn = _connect(Path(self._tmpdir.name) / "sitesearch.db")
        run_migrations(self._conn)

    def tearDown(self):
        self._conn.close()
        self._tmpdir.cleanup()

    def test_exception_raised(self):
        with patch.object(migration_module, "MIGRATIONS", list(MIGRATIONS) + [self._BAD_V2]):
            with self.assertRaises(sqlite3.Error):
                run_migrations(self._conn)

    def test_partial_migration_rolled_back(self):
        version_before = _current_version(self._conn)
        with patch.object(migration_module, "MIGRATIONS", list(MIGRATIONS) + [self._BAD_V2]):
            with self.assertRaises(sqlite3.Error):
                run_migrations(self._conn)
        self.assertEqual(_current_version(self._conn), version_before)
        self.assertNotIn("extra", _table_names(self._conn))


class TestVersionContinuityValidation(unittest.TestCase):
    def test_gap_raises_value_error(self):
        gap_migrations = list(MIGRATIONS) + [
            Migration(
                version=_LATEST_VERSION + 2,
                description="Gap migration",
                statements=("SELECT 1",),
            )
        ]
        with tempfile.TemporaryDirectory() as tmpdir:
            conn = _connect(Path(tmpdir) / "sitesearch.db")
            try:
                with patch.object(migration_module, "MIGRATIONS", gap_migrations):
                    with self.assertRaises(ValueError):
                        run_migrations(conn)
            finally:
                conn.close()


if __name__ == "__main__":
    unittest.main()
