"""Tests for console, JSON and CSV renderers."""

import csv
import json
import sys
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SiteSearch.core.compiler import compile_basic_query
from SiteSearch.core.models import SearchResult
from SiteSearch.renderers.console import render_text
from SiteSearch.renderers.csv import CsvFileWriter, render_csv, write_csv
from SiteSearch.renderers.json import JsonFileWriter, render_json
from SiteSearch.services.search import SearchOutcome


def _results() -> list[SearchResult]:
    return [
        SearchResult(title='Tips, "tricks"', url="https://example.com/tips", snippet="line one\nline two", position=1),
        SearchResult(
            title="News",
            url="https://example.com/news",
            snippet="Fresh",
            position=2,
            published=datetime(2024, 3, 3),
        ),
    ]


def _outcome() -> SearchOutcome:
    return SearchOutcome(
        domain="example.com",
        compiled=compile_basic_query("example.com", "tips"),
        params={"region": "us", "language": "en"},
        results=tuple(_results()),
    )


class TestCsvRenderer(unittest.TestCase):
    def test_header_and_quoting(self) -> None:
        text = render_csv(_results())
        self.assertTrue(text.startswith('"Title","URL","Snippet"\n'))
        self.assertIn('"Tips, ""tricks"""', text)

    def test_parses_back_with_csv_reader(self) -> None:
        rows = list(csv.reader(render_csv(_results()).splitlines(keepends=True)))
        self.assertEqual(rows[0], ["Title", "URL", "Snippet"])
        self.assertEqual(rows[1], ['Tips, "tricks"', "https://example.com/tips", "line one\nline two"])
        self.assertEqual(len(rows), 3)

    def test_empty_results_only_header(self) -> None:
        self.assertEqual(render_csv([]), '"Title","URL","Snippet"\n')

    def test_write_csv_creates_parents(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = write_csv(_results(), Path(tmp) / "exports" / "out.csv")
            self.assertTrue(path.exists())
            self.assertEqual(path.read_text(encoding="utf-8"), render_csv(_results()))

    def test_csv_file_writer(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            writer = CsvFileWriter(tmp)
            writer.write_search_result(_outcome())
            writer.finalize("search")
            files = list((Path(tmp) / "csv").glob("search_example.com_*.csv"))
            self.assertEqual(len(files), 1)


class TestJsonRenderer(unittest.TestCase):
    def test_render_json(self) -> None:
        items = render_json(_results())
        self.assertEqual(items[0], {"title": 'Tips, "tricks"', "url": "https://example.com/tips", "snippet": "line one\nline two", "position": 1})
        self.assertEqual(items[1]["published"], "2024-03-03")

    def test_json_file_writer(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            writer = JsonFileWriter(tmp)
            writer.write_search_result(_outcome())
            writer.finalize("search")
            files = list((Path(tmp) / "json").glob("search_*.json"))
            self.assertEqual(len(files), 1)
            payload = json.loads(files[0].read_text(encoding="utf-8"))
        self.assertEqual(payload[0]["query"], "site:example.com tips")
        self.assertEqual(payload[0]["operators"], ["site:example.com"])
        self.assertEqual(len(payload[0]["results"]), 2)


class TestTextRenderer(unittest.TestCase):
    def test_numbered_output(self) -> None:
        text = render_text(_results())
        self.assertTrue(text.startswith('1. Tips, "tricks"\n   https://example.com/tips\n'))
        self.assertIn("2. News", text)
        self.assertIn("Published: 2024-03-03", text)

    def test_no_results(self) -> None:
        self.assertEqual(render_text([]), "No results found.\n")


if __name__ == "__main__":
    unittest.main()
