"""
SerpAPI backends: Google Lens for identification, Google Shopping for prices.

Sign up:   https://serpapi.com/users/sign_up
API docs:  https://serpapi.com/google-lens-api
           https://serpapi.com/google-shopping-api

Both engines share one endpoint and one key (SERPAPI_API_KEY). Failures come
back either as a non-200 status or as a 200 with an "error" field, e.g.
  {"error": "Google hasn't returned any results for this query."}
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

import aiohttp

import config
from errors import IdentificationFailure, SearchFailure
from search_backends.base import ShoppingSearchBackend, VisualSearchBackend

logger = logging.getLogger(__name__)

SEARCH_URL = "https://serpapi.com/search.json"


async def _get(params: dict, timeout: float) -> tuple[int, dict, str]:
    """Single GET to SerpAPI. Returns (status, json-or-{}, body-text)."""
    async with aiohttp.ClientSession() as session:
        async with session.get(
            SEARCH_URL,
            params=params,
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as resp:
            if resp.status != 200:
                return resp.status, {}, await resp.text()
            return resp.status, await resp.json(), ""


class SerpApiLensBackend(VisualSearchBackend):

    def __init__(
        self,
        api_key: str,
        country: str = config.TARGET_COUNTRY,
        language: str = config.TARGET_LANGUAGE,
        timeout: float = config.HTTP_TIMEOUT_SECS,
    ) -> None:
        self._key      = api_key
        self._country  = country
        self._language = language
        self._timeout  = timeout

    @property
    def name(self) -> str:
        return "SerpAPI / Google Lens"

    async def identify(self, image_url: str) -> list[str]:
        params = {
            "engine":  "google_lens",
            "url":     image_url,
            "country": self._country,
            "hl":      self._language,
            "api_key": self._key,
        }
        try:
            status, data, text = await _get(params, self._timeout)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise IdentificationFailure(f"Google Lens request failed: {exc}") from exc

        if status != 200:
            raise IdentificationFailure(f"Google Lens error {status}: {text[:200]}")
        if data.get("error"):
            raise IdentificationFailure(f"Google Lens: {data['error']}")

        titles = _visual_titles(data)
        logger.info("Google Lens returned %d visual matches", len(titles))
        if not titles:
            raise IdentificationFailure("Google Lens found no visual matches for this photo.")
        return titles


class SerpApiShoppingBackend(ShoppingSearchBackend):

    def __init__(
        self,
        api_key: str,
        language: str = config.TARGET_LANGUAGE,
        max_results: int = 40,
        timeout: float = config.HTTP_TIMEOUT_SECS,
    ) -> None:
        self._key         = api_key
        self._language    = language
        self._max_results = max_results
        self._timeout     = timeout

    @property
    def name(self) -> str:
        return "SerpAPI / Google Shopping"

    async def search(self, query: str, region: str, currency: str) -> list[dict]:
        params = {
            "engine":   "google_shopping",
            "q":        query,
            "gl":       region,
            "hl":       self._language,
            "currency": currency,
            "num":      str(self._max_results),
            "api_key":  self._key,
        }
        try:
            status, data, text = await _get(params, self._timeout)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise SearchFailure(f"Google Shopping request failed: {exc}") from exc

        if status != 200:
            raise SearchFailure(f"Google Shopping error {status}: {text[:200]}")
        if data.get("error"):
            raise SearchFailure(f"Google Shopping: {data['error']}")

        records = _shopping_records(data)
        logger.info("Google Shopping returned %d records for query '%s'", len(records), query)
        return records


# ── Helpers ────────────────────────────────────────────────────────────────────

def _visual_titles(data: dict) -> list[str]:
    """Titles of visual_matches (falling back to knowledge_graph), in order."""
    titles: list[str] = []
    for match in data.get("visual_matches") or []:
        title = _title(match)
        if title:
            titles.append(title)
    if not titles:
        for entry in data.get("knowledge_graph") or []:
            title = _title(entry)
            if title:
                titles.append(title)
    return titles


def _title(entry: object) -> Optional[str]:
    if not isinstance(entry, dict):
        return None
    title = entry.get("title")
    if isinstance(title, str) and title.strip():
        return title.strip()
    return None


def _shopping_records(data: dict) -> list[dict]:
    """Organic shopping_results first, then inline_shopping_results."""
    records: list[dict] = []
    for key in ("shopping_results", "inline_shopping_results"):
        for record in data.get(key) or []:
            if isinstance(record, dict):
                records.append(record)
    return records
