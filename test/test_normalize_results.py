"""Tests for provider result normalization."""

import sys
import unittest
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SiteSearch.core.models import DEFAULT_SNIPPET, DEFAULT_TITLE
from SiteSearch.core.normalize import normalize_results


class TestNormalizeResults(unittest.TestCase):
    def test_maps_complete_record(self) -> None:
        results = normalize_results(
            [{"title": " Intro ", "link": "https://example.com/intro", "snippet": "Start here"}]
        )
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].title, "Intro")
        self.assertEqual(results[0].url, "https://example.com/intro")
        self.assertEqual(results[0].snippet, "Start here")
        self.assertEqual(results[0].position, 1)

    def test_drops_records_without_usable_url(self) -> None:
        records = [
            {"title": "kept", "link": "https://example.com/a"},
            {"title": "no url"},
            {"title": "relative", "link": "/docs/a"},
            {"title": "ftp", "link": "ftp://example.com/file"},
            {"title": "blank", "link": "   "},
        ]
        results = normalize_results(records)
        self.assertEqual([r.title for r in results], ["kept"])

    def test_falls_back_to_url_field(self) -> None:
        results = normalize_results([{"url": "http://example.com/b"}])
        self.assertEqual(results[0].url, "http://example.com/b")

    def test_defaults_for_missing_title_and_snippet(self) -> None:
        results = normalize_results([{"link": "https://example.com", "title": "", "snippet": 7}])
        self.assertEqual(results[0].title, DEFAULT_TITLE)
        self.assertEqual(results[0].snippet, DEFAULT_SNIPPET)

    def test_preserves_order_and_renumbers_positions(self) -> None:
        records = [
            {"title": "one", "link": "https://example.com/1"},
            {"title": "skip"},
            {"title": "two", "link": "https://example.com/2"},
            {"title": "three", "link": "https://example.com/3"},
        ]
        results = normalize_results(records)
        self.assertEqual([r.title for r in results], ["one", "two", "three"])
        self.assertEqual([r.position for r in results], [1, 2, 3])

    def test_skips_non_mapping_records(self) -> None:
        results = normalize_results(["junk", None, 3, {"link": "https://example.com"}])
        self.assertEqual(len(results), 1)

    def test_none_and_empty_input(self) -> None:
        self.assertEqual(normalize_results(None), [])
        self.assertEqual(normalize_results([]), [])

    def test_parses_provider_date(self) -> None:
        results = normalize_results([{"link": "https://example.com", "date": "Mar 3, 2024"}])
        self.assertEqual(results[0].published, datetime(2024, 3, 3))

    def test_unparseable_date_is_none(self) -> None:
        results = normalize_results([{"link": "https://example.com", "date": "unknown"}])
        self.assertIsNone(results[0].published)


if __name__ == "__main__":
    unittest.main()
