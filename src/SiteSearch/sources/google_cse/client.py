"""Google Custom Search JSON API client.

Calls the Programmable Search Engine endpoint and returns its raw ``items``
(``{title, link, snippet, ...}``). The API serves at most 10 items per
request and 100 per query, so larger requests are paged with ``start``.
"""

from __future__ import annotations

import random
import time
from typing import Any, Mapping

import requests

from SiteSearch.utils.log import log

CSE_URL = "https://www.googleapis.com/customsearch/v1"
DEFAULT_TIMEOUT = 30.0
PAGE_SIZE = 10
MAX_RESULTS = 100
MAX_ATTEMPTS = 4
BASE_PAUSE = 1.0
MAX_SLEEP = 10.0
RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class GoogleCseApiClient:
    """Low-level HTTP client for the Custom Search JSON API."""

    def __init__(self, api_key: str, cx: str, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._api_key = api_key
        self._cx = cx
        self._timeout = timeout
        self._session = requests.Session()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def fetch_items(
        self,
        *,
        query: str,
        params: Mapping[str, str] | None,
        max_results: int,
    ) -> list[dict[str, Any]]:
        """Fetch up to `max_results` items, paging 10 at a time.

        Args:
            query: Compiled query string.
            params: Neutral auxiliary params (region, language, time_range).
            max_results: Number of items wanted.

        Returns:
            Raw item mappings in upstream order.
        """
        wanted = max(1, min(int(max_results), MAX_RESULTS))
        items: list[dict[str, Any]] = []
        start = 1
        while len(items) < wanted:
            num = min(PAGE_SIZE, wanted - len(items))
            request_params = build_request_params(
                query=query,
                params=params,
                api_key=self._api_key,
                cx=self._cx,
                start=start,
                num=num,
            )
            log.debug("Google CSE request: q=%s start=%d num=%d", query, start, num)
            response = self._get_with_retry(params=request_params)
            response.raise_for_status()

            payload = response.json()
            page = payload.get("items", []) if isinstance(payload, dict) else []
            if not isinstance(page, list) or not page:
                break
            items.extend(item for item in page if isinstance(item, dict))
            if len(page) < num:
                break
            start += len(page)
        return items[:wanted]

    def _get_with_retry(self, *, params: dict[str, str]) -> requests.Response:
        """Issue GET with retries for transient failures."""
        last_error: Exception | None = None
        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                response = self._session.get(CSE_URL, params=params, timeout=self._timeout)
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
                    log.debug("Google CSE retry attempt=%d/%d delay=%.2fs error=%s", attempt, MAX_ATTEMPTS, delay, error)
                    time.sleep(delay)

        assert last_error is not None
        raise last_error


def build_request_params(
    *,
    query: str,
    params: Mapping[str, str] | None,
    api_key: str,
    cx: str,
    start: int = 1,
    num: int = PAGE_SIZE,
) -> dict[str, str]:
    """Translate neutral params into Custom Search query parameters."""
    params = params or {}
    out = {
        "key": api_key,
        "cx": cx,
        "q": query,
        "start": str(start),
        "num": str(num),
    }
    region = str(params.get("region", "")).strip()
    language = str(params.get("language", "")).strip()
    time_range = str(params.get("time_range", "")).strip()
    if region:
        out["gl"] = region
    if language:
        out["hl"] = language
    if time_range:
        out["dateRestrict"] = f"{time_range}1"
    return out
