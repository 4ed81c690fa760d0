"""
Reconciliation engine: canonical name + raw shopping results → ProductResult.

Pure and synchronous: no I/O, no shared mutable state. Concurrent scans can
share one engine instance.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import quote_plus

import config
from reconcile.scorer import ScoredCandidate, rank_candidates
from reconcile.selector import select
from reconcile.tables import DEFAULT_TABLES, ReconcileTables
from reconcile.trust import UNKNOWN_CURRENCY, link_host, record_link, record_source

logger = logging.getLogger(__name__)

CONFIDENCE_PRICED   = 90
CONFIDENCE_UNPRICED = 60


@dataclass
class SourceLink:
    uri: str
    title: str
    price_text: str

    def to_dict(self) -> dict:
        return {"web": {"uri": self.uri, "title": self.title, "price": self.price_text}}


@dataclass
class ProductResult:
    name: str
    price_min: int
    price_max: int
    currency: str               # display symbol, e.g. "₹"
    confidence: int             # 0-100
    shop_url: str
    source_name: str
    in_stock: bool
    price_available: bool
    sources: list[SourceLink] = field(default_factory=list)
    description: str = ""
    image_url: Optional[str] = None
    score: Optional[float] = None

    def to_dict(self) -> dict:
        """camelCase shape consumed by the result card."""
        out = {
            "name":           self.name,
            "description":    self.description,
            "priceMin":       self.price_min,
            "priceMax":       self.price_max,
            "currency":       self.currency,
            "confidence":     self.confidence,
            "shopUrl":        self.shop_url,
            "sourceName":     self.source_name,
            "inStock":        self.in_stock,
            "priceAvailable": self.price_available,
            "sources":        [s.to_dict() for s in self.sources],
        }
        if self.image_url:
            out["imageUrl"] = self.image_url
        if self.score is not None:
            out["score"] = self.score
        return out


def search_url(name: str) -> str:
    return f"https://www.google.com/search?q={quote_plus(name or 'product')}"


class ReconciliationEngine:

    def __init__(
        self,
        tables: ReconcileTables = DEFAULT_TABLES,
        max_alternates: int = config.MAX_ALTERNATES,
        max_extra_alternates: int = config.MAX_EXTRA_ALTERNATES,
    ) -> None:
        self.tables = tables
        self.max_alternates = max_alternates
        self.max_extra_alternates = max_extra_alternates

    def reconcile(self, canonical_name: str, raw_results: list) -> ProductResult:
        """
        Reduce raw_results to one best listing plus alternates.
        Raises NoQualifyingCandidate when every record is vetoed (or there
        are none).
        """
        ranked = rank_candidates(canonical_name, raw_results, self.tables)
        logger.info(
            "Reconcile '%s': %d raw → %d ranked (%d vetoed or unusable)",
            canonical_name, len(raw_results or []), len(ranked),
            len(raw_results or []) - len(ranked),
        )

        selection = select(ranked, self.max_alternates, self.max_extra_alternates)
        best = selection.best
        logger.info(
            "Winner #%d score=%.1f price=%d-%d region_ok=%s trusted=%s match=%d",
            best.index, best.score, best.price.min, best.price.max,
            best.region_ok, best.trusted, best.match_score,
        )
        return self._assemble(canonical_name, best, selection.alternates)

    # ── Assembly ──────────────────────────────────────────────────────────────

    def _assemble(
        self,
        canonical_name: str,
        best: ScoredCandidate,
        alternates: list[ScoredCandidate],
    ) -> ProductResult:
        link   = record_link(best.record, self.tables)
        source = record_source(best.record, self.tables) or link_host(link)
        priced = best.price.found

        if priced:
            description = f"Best price from {source}" if source else "Best price found"
        else:
            description = "No price listed, showing the closest match"

        return ProductResult(
            name            = canonical_name,
            price_min       = best.price.min if priced else 0,
            price_max       = best.price.max if priced else 0,
            currency        = self._symbol(best.currency),
            confidence      = CONFIDENCE_PRICED if priced else CONFIDENCE_UNPRICED,
            shop_url        = link or search_url(canonical_name),
            source_name     = source,
            in_stock        = best.in_stock,
            price_available = priced,
            sources         = [self._source_link(c) for c in alternates],
            description     = description,
            score           = best.score,
        )

    def _source_link(self, candidate: ScoredCandidate) -> SourceLink:
        return SourceLink(
            uri        = record_link(candidate.record, self.tables),
            title      = candidate.title,
            price_text = candidate.price.original_text,
        )

    def _symbol(self, currency: str) -> str:
        if currency != UNKNOWN_CURRENCY:
            for cur in self.tables.currencies:
                if cur.code == currency:
                    return cur.symbol
        return self.tables.target.symbol
