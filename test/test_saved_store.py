"""Tests for saved search storage."""

import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SiteSearch.core.query import SearchConstraints
from SiteSearch.storage.db import DatabaseManager
from SiteSearch.storage.saved import SavedSearchStore


class TestSavedSearchStore(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self._manager = DatabaseManager(Path(self._tmpdir.name) / "sitesearch.db")
        self._store = SavedSearchStore(self._manager)
        self._constraints = SearchConstraints(domain="example.com", all_of_terms="machine learning", file_type="pdf")

    def tearDown(self) -> None:
        self._manager.close()
        self._tmpdir.cleanup()

    def test_create_and_reload_constraints(self) -> None:
        saved = self._store.create("alice", " ml papers ", self._constraints)
        self.assertEqual(saved.name, "ml papers")
        self.assertEqual(saved.constraints["all_of_terms"], "machine learning")

        loaded = self._store.get_by_name("alice", "ml papers")
        self.assertIsNotNone(loaded)
        assert loaded is not None
        self.assertEqual(SearchConstraints.from_mapping(loaded.constraints), self._constraints)

    def test_duplicate_name_rejected(self) -> None:
        self._store.create("alice", "docs", self._constraints)
        with self.assertRaisesRegex(ValueError, "already exists"):
            self._store.create("alice", "docs", self._constraints)

    def test_same_name_allowed_for_other_user(self) -> None:
        self._store.create("alice", "docs", self._constraints)
        saved = self._store.create("bob", "docs", self._constraints)
        self.assertEqual(saved.user_id, "bob")

    def test_blank_name_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "name"):
            self._store.create("alice", "  ", self._constraints)

    def test_list_is_scoped_and_newest_first(self) -> None:
        first = self._store.create("alice", "a", self._constraints)
        second = self._store.create("alice", "b", self._constraints)
        self._store.create("bob", "c", self._constraints)
        self.assertEqual([s.id for s in self._store.list_for_user("alice")], [second.id, first.id])

    def test_update_name_and_constraints(self) -> None:
        saved = self._store.create("alice", "docs", self._constraints)
        new_constraints = SearchConstraints(domain="docs.example.com", exclude_terms="beta")
        updated = self._store.update(saved.id, "alice", name="guides", constraints=new_constraints)
        self.assertIsNotNone(updated)
        assert updated is not None
        self.assertEqual(updated.name, "guides")
        self.assertEqual(updated.constraints["domain"], "docs.example.com")
        self.assertIsNone(self._store.get_by_name("alice", "docs"))

    def test_update_other_users_search_returns_none(self) -> None:
        saved = self._store.create("alice", "docs", self._constraints)
        self.assertIsNone(self._store.update(saved.id, "bob", name="mine"))

    def test_update_to_taken_name_rejected(self) -> None:
        self._store.create("alice", "a", self._constraints)
        saved = self._store.create("alice", "b", self._constraints)
        with self.assertRaises(ValueError):
            self._store.update(saved.id, "alice", name="a")

    def test_delete(self) -> None:
        saved = self._store.create("alice", "docs", self._constraints)
        self.assertFalse(self._store.delete(saved.id, "bob"))
        self.assertTrue(self._store.delete(saved.id, "alice"))
        self.assertFalse(self._store.delete(saved.id, "alice"))
        self.assertEqual(self._store.list_for_user("alice"), [])


if __name__ == "__main__":
    unittest.main()
