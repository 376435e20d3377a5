"""Tests for Serper and Google Custom Search clients."""

import sys
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SiteSearch.sources.google_cse.client import GoogleCseApiClient, build_request_params
from SiteSearch.sources.registry import build_source, supported_source_names
from SiteSearch.sources.serper.client import SerperApiClient, build_request_body
from SiteSearch.sources.serper.source import SerperSource


def _response(status_code: int = 200, payload=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {}
    return response


class TestSerperRequestBody(unittest.TestCase):
    def test_maps_neutral_params(self) -> None:
        body = build_request_body(
            query="site:example.com python",
            params={"region": "gb", "language": "en", "time_range": "w"},
            max_results=10,
        )
        self.assertEqual(
            body,
            {"q": "site:example.com python", "num": 10, "gl": "gb", "hl": "en", "tbs": "qdr:w"},
        )

    def test_no_time_range_means_no_tbs(self) -> None:
        body = build_request_body(query="q", params={"region": "us"}, max_results=10)
        self.assertNotIn("tbs", body)
        self.assertNotIn("hl", body)

    def test_num_is_clamped(self) -> None:
        self.assertEqual(build_request_body(query="q", params=None, max_results=500)["num"], 100)
        self.assertEqual(build_request_body(query="q", params=None, max_results=0)["num"], 1)


class TestSerperApiClient(unittest.TestCase):
    def test_fetch_organic_posts_and_filters(self) -> None:
        client = SerperApiClient("key-123", timeout=5)
        payload = {"organic": [{"title": "A", "link": "https://example.com"}, "junk"]}
        with patch.object(client._session, "post", return_value=_response(payload=payload)) as post:
            items = client.fetch_organic(query="site:example.com", params={"region": "us"}, max_results=3)

        self.assertEqual(items, [{"title": "A", "link": "https://example.com"}])
        kwargs = post.call_args.kwargs
        self.assertEqual(kwargs["headers"]["X-API-KEY"], "key-123")
        self.assertEqual(kwargs["json"]["q"], "site:example.com")
        self.assertEqual(kwargs["json"]["num"], 3)
        self.assertEqual(kwargs["timeout"], 5)

    def test_missing_organic_returns_empty(self) -> None:
        client = SerperApiClient("key")
        with patch.object(client._session, "post", return_value=_response(payload={"searchParameters": {}})):
            self.assertEqual(client.fetch_organic(query="q", params=None, max_results=10), [])

    def test_retries_transient_status(self) -> None:
        client = SerperApiClient("key")
        responses = [_response(503), _response(payload={"organic": [{"link": "https://example.com"}]})]
        with patch.object(client._session, "post", side_effect=responses) as post, patch(
            "SiteSearch.sources.serper.client.time.sleep"
        ) as sleep:
            items = client.fetch_organic(query="q", params=None, max_results=10)

        self.assertEqual(len(items), 1)
        self.assertEqual(post.call_count, 2)
        sleep.assert_called_once()

    def test_source_delegates_to_client(self) -> None:
        client = MagicMock()
        client.fetch_organic.return_value = [{"link": "https://example.com"}]
        source = SerperSource(client=client)
        records = source.search("q", params={"region": "us"}, max_results=4)
        self.assertEqual(records, [{"link": "https://example.com"}])
        client.fetch_organic.assert_called_once_with(query="q", params={"region": "us"}, max_results=4)
        source.close()
        client.close.assert_called_once()


class TestGoogleCseClient(unittest.TestCase):
    def test_request_params(self) -> None:
        params = build_request_params(
            query="site:example.com",
            params={"region": "us", "language": "fr", "time_range": "m"},
            api_key="k",
            cx="engine",
        )
        self.assertEqual(
            params,
            {
                "key": "k",
                "cx": "engine",
                "q": "site:example.com",
                "start": "1",
                "num": "10",
                "gl": "us",
                "hl": "fr",
                "dateRestrict": "m1",
            },
        )

    def test_fetch_items_pages_by_ten(self) -> None:
        client = GoogleCseApiClient("k", "engine")
        first_page = {"items": [{"link": f"https://example.com/{i}"} for i in range(10)]}
        second_page = {"items": [{"link": f"https://example.com/{i}"} for i in range(10, 15)]}
        with patch.object(
            client._session, "get", side_effect=[_response(payload=first_page), _response(payload=second_page)]
        ) as get:
            items = client.fetch_items(query="q", params=None, max_results=15)

        self.assertEqual(len(items), 15)
        starts = [call.kwargs["params"]["start"] for call in get.call_args_list]
        nums = [call.kwargs["params"]["num"] for call in get.call_args_list]
        self.assertEqual(starts, ["1", "11"])
        self.assertEqual(nums, ["10", "5"])

    def test_fetch_items_stops_on_empty_page(self) -> None:
        client = GoogleCseApiClient("k", "engine")
        with patch.object(client._session, "get", return_value=_response(payload={})) as get:
            items = client.fetch_items(query="q", params=None, max_results=30)
        self.assertEqual(items, [])
        self.assertEqual(get.call_count, 1)


class TestSourceRegistry(unittest.TestCase):
    def _config(self, provider: str, api_key: str = "", cse_id: str = ""):
        return SimpleNamespace(
            search=SimpleNamespace(
                provider=provider,
                api_key=api_key,
                api_key_env="SERPER_API_KEY",
                cse_id=cse_id,
                cse_id_env="GOOGLE_CSE_ID",
                timeout=10.0,
            )
        )

    def test_supported_names(self) -> None:
        self.assertEqual(supported_source_names(), ("serper", "google_cse"))

    def test_unknown_provider(self) -> None:
        with self.assertRaisesRegex(ValueError, "Unsupported provider"):
            build_source("bing", config=self._config("bing"))

    def test_missing_key_names_env_variable(self) -> None:
        with self.assertRaisesRegex(ValueError, "SERPER_API_KEY"):
            build_source("serper", config=self._config("serper"))

    def test_cse_requires_engine_id(self) -> None:
        with self.assertRaisesRegex(ValueError, "GOOGLE_CSE_ID"):
            build_source("google_cse", config=self._config("google_cse", api_key="k"))

    def test_builds_serper_source(self) -> None:
        source = build_source("serper", config=self._config("serper", api_key="k"))
        try:
            self.assertEqual(source.name, "serper")
        finally:
            source.close()


if __name__ == "__main__":
    unittest.main()
