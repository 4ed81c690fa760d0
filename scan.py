"""
scan.py: public interface for pricing a product photo.

The rest of the app imports only from here:
  from scan import scan_image, scan_image_url, fallback_result

One scan is strictly sequential:
  1. upload      image bytes → public URL            (image_host)
  2. identify    URL → visual-match titles           (Google Lens)
  3. sanitize    first title → canonical name        (+ optional Gemini cleanup)
  4. search      canonical name → raw shopping rows  (Google Shopping)
  5. reconcile   rows → ProductResult                (reconcile.engine)

All credentials are checked before step 1, so a missing key never costs a
network round-trip. Any ScanError aborts the scan; callers that must show
something use fallback_result(exc).
"""
from __future__ import annotations

import logging
from typing import Optional

import config
import key_store
from errors import ScanError
from image_host import upload_image
from reconcile.engine import ProductResult, ReconciliationEngine
from reconcile.sanitizer import sanitize_name
from reconcile.tables import tables_from_config
from search_backends.base import ShoppingSearchBackend, VisualSearchBackend

logger = logging.getLogger(__name__)

__all__ = ["scan_image", "scan_image_url", "canonical_name", "fallback_result", "get_engine"]

_engine: Optional[ReconciliationEngine] = None


def get_engine() -> ReconciliationEngine:
    """Return the shared engine, building its tables once on first call."""
    global _engine
    if _engine is None:
        _engine = ReconciliationEngine(tables_from_config())
    return _engine


def _build_backends(serpapi_key: str) -> tuple[VisualSearchBackend, ShoppingSearchBackend]:
    from search_backends.serpapi_backend import SerpApiLensBackend, SerpApiShoppingBackend
    return SerpApiLensBackend(serpapi_key), SerpApiShoppingBackend(serpapi_key)


# ── Name cleanup ──────────────────────────────────────────────────────────────

async def _llm_clean(raw_title: str, alternatives: list[str]) -> Optional[str]:
    """Gemini cleanup when enabled. Failures fall back to the raw title."""
    if not config.LLM_NAME_CLEANUP:
        return None
    google_key = key_store.get("google_api_key")
    if not google_key:
        logger.info("LLM_NAME_CLEANUP is on but GOOGLE_API_KEY is not set, skipping")
        return None

    from providers.gemini_provider import GeminiNameCleaner
    cleaner = GeminiNameCleaner(google_key, config.GEMINI_MODEL)
    try:
        return await cleaner.clean(raw_title, alternatives)
    except Exception as exc:
        logger.warning("[%s] name cleanup failed, using sanitizer only: %s", cleaner.full_name, exc)
        return None


async def canonical_name(titles: list[str]) -> str:
    """Canonical name for the best visual match (titles[0])."""
    raw_title = titles[0]
    cleaned = await _llm_clean(raw_title, titles[1:])
    name = sanitize_name(cleaned or raw_title, get_engine().tables)
    logger.info("Canonical name: %r (from %r)", name, raw_title)
    return name


# ── Public scan functions ─────────────────────────────────────────────────────

async def scan_image_url(image_url: str, serpapi_key: Optional[str] = None) -> ProductResult:
    """Price the product shown at a public image URL."""
    if serpapi_key is None:
        (serpapi_key,) = key_store.require("serpapi_api_key")
    lens, shopping = _build_backends(serpapi_key)

    titles = await lens.identify(image_url)
    name = await canonical_name(titles)

    records = await shopping.search(name, config.TARGET_COUNTRY, config.TARGET_CURRENCY)
    result = get_engine().reconcile(name, records)
    result.image_url = image_url
    return result


async def scan_image(image_bytes: bytes) -> ProductResult:
    """Upload a photo and price the product in it."""
    serpapi_key, imgbb_key = key_store.require("serpapi_api_key", "imgbb_api_key")
    image_url = await upload_image(image_bytes, imgbb_key)
    return await scan_image_url(image_url, serpapi_key)


def fallback_result(exc: Exception, image_url: Optional[str] = None) -> ProductResult:
    """Deterministic "could not price this item" result for a failed scan."""
    if not isinstance(exc, ScanError):
        logger.error("Unexpected scan error: %s", exc, exc_info=exc)
    return ProductResult(
        name            = "Scan Failed",
        price_min       = 0,
        price_max       = 0,
        currency        = get_engine().tables.target.symbol,
        confidence      = 0,
        shop_url        = "#",
        source_name     = "",
        in_stock        = False,
        price_available = False,
        description     = str(exc) or "Could not price this item.",
        image_url       = image_url,
    )
