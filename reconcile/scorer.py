"""
Candidate scorer & ranker.

    score = region      (+80 matched  / -100 not)
          + price       (+100 + confidence bonus / -50 missing)
          + title match (match_score / 100 × 30)
          + trust       (+20 trusted seller)
          + stock       (+10 in stock / -5 out, only when priced)

Region and price dominate, title match is secondary, trust and stock break
ties. Blocked sellers never reach the scorer.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from reconcile.matcher import match_score
from reconcile.price_extractor import PriceExtraction, extract_price
from reconcile.stock import StockStatus, stock_from_signal, stock_signal
from reconcile.tables import DEFAULT_TABLES, ReconcileTables
from reconcile.trust import classify_source

logger = logging.getLogger(__name__)

REGION_MATCH   = 80
REGION_MISS    = -100
PRICE_FOUND    = 100
PRICE_MISSING  = -50
TITLE_WEIGHT   = 30
TRUSTED_BONUS  = 20
IN_STOCK_BONUS = 10
OUT_OF_STOCK   = -5


@dataclass
class ScoredCandidate:
    record: dict
    index: int                  # position in the raw result list
    score: float
    price: PriceExtraction
    stock: StockStatus          # raw signal before defaulting
    in_stock: bool              # after the stock policy
    trusted: bool
    region_ok: bool
    match_score: int
    currency: str

    @property
    def has_price(self) -> bool:
        return self.price.found

    @property
    def title(self) -> str:
        title = self.record.get("title")
        return title.strip() if isinstance(title, str) else ""


def confidence_bonus(confidence: int) -> int:
    if confidence >= 90:
        return 20
    if confidence >= 80:
        return 10
    return 0


def composite_score(
    *,
    region_ok: bool,
    price: PriceExtraction,
    match: int,
    trusted: bool,
    in_stock: bool,
) -> float:
    score = REGION_MATCH if region_ok else REGION_MISS
    if price.found:
        score += PRICE_FOUND + confidence_bonus(price.confidence)
        score += IN_STOCK_BONUS if in_stock else OUT_OF_STOCK
    else:
        score += PRICE_MISSING
    score += match * TITLE_WEIGHT / 100
    if trusted:
        score += TRUSTED_BONUS
    return score


def score_candidate(
    canonical_name: str,
    record: Any,
    index: int = 0,
    tables: ReconcileTables = DEFAULT_TABLES,
) -> Optional[ScoredCandidate]:
    """Score one raw record. Returns None for vetoed or unusable records."""
    if not isinstance(record, dict):
        logger.debug("Skipping non-object search result #%d: %r", index, type(record))
        return None

    price   = extract_price(record, tables)
    verdict = classify_source(record, price.original_text, tables)
    if verdict.blocked:
        logger.info("Vetoed blocked seller #%d: %s", index, record.get("source") or record.get("link"))
        return None

    title    = record.get("title") if isinstance(record.get("title"), str) else ""
    match    = match_score(canonical_name, title)
    stock    = stock_signal(record, tables)
    in_stock = stock_from_signal(stock, price, tables)

    return ScoredCandidate(
        record      = record,
        index       = index,
        score       = composite_score(
            region_ok=verdict.region_ok,
            price=price,
            match=match,
            trusted=verdict.trusted,
            in_stock=in_stock,
        ),
        price       = price,
        stock       = stock,
        in_stock    = in_stock,
        trusted     = verdict.trusted,
        region_ok   = verdict.region_ok,
        match_score = match,
        currency    = verdict.currency,
    )


def rank_candidates(
    canonical_name: str,
    records: list,
    tables: ReconcileTables = DEFAULT_TABLES,
) -> list[ScoredCandidate]:
    """Score every record and sort best-first. Ties keep the original order."""
    scored: list[ScoredCandidate] = []
    for index, record in enumerate(records or []):
        candidate = score_candidate(canonical_name, record, index, tables)
        if candidate is not None:
            scored.append(candidate)

    # list.sort is stable, reverse=True included
    scored.sort(key=lambda c: c.score, reverse=True)
    return scored
