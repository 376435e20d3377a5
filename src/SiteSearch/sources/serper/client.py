"""Serper.dev API client.

Serper proxies Google web search and returns JSON with an ``organic`` list
of ``{title, link, snippet, date?, position}`` records.
"""

from __future__ import annotations

import random
import time
from typing import Any, Mapping

import requests

from SiteSearch.utils.log import log

SERPER_SEARCH_URL = "https://google.serper.dev/search"
DEFAULT_TIMEOUT = 30.0
MAX_ATTEMPTS = 4
BASE_PAUSE = 0.8
MAX_SLEEP = 8.0
MAX_RESULTS = 100
RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class SerperApiClient:
    """Low-level HTTP client for the Serper search endpoint."""

    def __init__(self, api_key: str, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Initialize the client with a reusable HTTP session.

        Args:
            api_key: Serper API key sent as ``X-API-KEY``.
            timeout: Default request timeout in seconds.
        """
        self._api_key = api_key
        self._timeout = timeout
        self._session = requests.Session()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def fetch_organic(
        self,
        *,
        query: str,
        params: Mapping[str, str] | None,
        max_results: int,
    ) -> list[dict[str, Any]]:
        """Fetch organic results for a compiled query.

        Args:
            query: Compiled query string.
            params: Neutral auxiliary params (region, language, time_range).
            max_results: Number of results to request.

        Returns:
            Raw organic result mappings in upstream order.
        """
        body = build_request_body(query=query, params=params, max_results=max_results)
        log.debug("Serper request: q=%s gl=%s hl=%s tbs=%s", body["q"], body.get("gl"), body.get("hl"), body.get("tbs"))

        response = self._post_with_retry(body=body)
        response.raise_for_status()

        payload = response.json()
        organic = payload.get("organic", []) if isinstance(payload, dict) else []
        if not isinstance(organic, list):
            return []
        return [item for item in organic if isinstance(item, dict)]

    def _post_with_retry(self, *, body: dict[str, Any]) -> requests.Response:
        """Issue POST with retries for transient failures."""
        headers = {
            "X-API-KEY": self._api_key,
            "Content-Type": "application/json",
        }
        last_error: Exception | None = None
        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                response = self._session.post(
                    SERPER_SEARCH_URL,
                    json=body,
                    headers=headers,
                    timeout=self._timeout,
                )
                if response.status_code in RETRYABLE_STATUS:
                    raise requests.HTTPError(
                        f"HTTP {response.status_code}",
                        response=response,
                    )
                return response
            except (requests.Timeout, requests.ConnectionError, requests.HTTPError) as error:
                last_error = error
                if isinstance(error, requests.HTTPError):
                    status_code = getattr(error.response, "status_code", None)
                    if status_code not in RETRYABLE_STATUS:
                        raise
                if attempt < MAX_ATTEMPTS:
                    delay = min(BASE_PAUSE * (2 ** (attempt - 1)) + random.uniform(0, 0.3), MAX_SLEEP)
                    log.debug("Serper retry attempt=%d/%d delay=%.2fs error=%s", attempt, MAX_ATTEMPTS, delay, error)
                    time.sleep(delay)

        assert last_error is not None
        raise last_error


def build_request_body(
    *,
    query: str,
    params: Mapping[str, str] | None,
    max_results: int,
) -> dict[str, Any]:
    """Translate neutral params into a Serper JSON body."""
    params = params or {}
    body: dict[str, Any] = {
        "q": query,
        "num": max(1, min(int(max_results), MAX_RESULTS)),
    }
    region = str(params.get("region", "")).strip()
    language = str(params.get("language", "")).strip()
    time_range = str(params.get("time_range", "")).strip()
    if region:
        body["gl"] = region
    if language:
        body["hl"] = language
    if time_range:
        body["tbs"] = f"qdr:{time_range}"
    return body
