"""
Tests for reconcile/scorer.py.

Covers:
  - composite_score: weights, confidence bonus, stock only counts when priced
  - score_candidate: veto, non-dict input, field wiring
  - rank_candidates: ordering policy and stable ties
"""
from __future__ import annotations

from unittest.mock import patch

import pytest

from reconcile.price_extractor import NO_PRICE, PriceExtraction
from reconcile.scorer import (
    composite_score,
    confidence_bonus,
    rank_candidates,
    score_candidate,
)
from reconcile.stock import StockStatus, stock_signal


def _price(confidence: int = 95, value: int = 1499) -> PriceExtraction:
    return PriceExtraction(min=value, max=value, original_text=str(value), confidence=confidence)


def _rec(**overrides) -> dict:
    base = {
        "title":        "boAt Nirvana Ion TWS Earbuds",
        "product_link": "https://www.flipkart.com/boat-nirvana-ion/p/itm123",
        "source":       "Flipkart",
        "price":        "₹1,499",
    }
    base.update(overrides)
    return base


# ── composite_score ───────────────────────────────────────────────────────────

class TestCompositeScore:
    @pytest.mark.parametrize("confidence, bonus", [(95, 20), (90, 20), (85, 10), (80, 10), (70, 0), (0, 0)])
    def test_confidence_bonus(self, confidence, bonus):
        assert confidence_bonus(confidence) == bonus

    def test_best_case(self):
        score = composite_score(region_ok=True, price=_price(95), match=100, trusted=True, in_stock=True)
        assert score == 80 + 100 + 20 + 30 + 20 + 10

    def test_worst_case(self):
        score = composite_score(region_ok=False, price=NO_PRICE, match=0, trusted=False, in_stock=True)
        assert score == -100 - 50

    def test_stock_ignored_without_price(self):
        a = composite_score(region_ok=True, price=NO_PRICE, match=70, trusted=True, in_stock=True)
        b = composite_score(region_ok=True, price=NO_PRICE, match=70, trusted=True, in_stock=False)
        assert a == b == 80 - 50 + 21 + 20

    def test_out_of_stock_penalty_when_priced(self):
        score = composite_score(region_ok=True, price=_price(70), match=0, trusted=False, in_stock=False)
        assert score == 80 + 100 - 5

    def test_region_and_price_dominate_title_and_trust(self):
        regional_priced = composite_score(region_ok=True, price=_price(70), match=0, trusted=False, in_stock=False)
        foreign_perfect = composite_score(region_ok=False, price=_price(95), match=100, trusted=True, in_stock=True)
        regional_unpriced = composite_score(region_ok=True, price=NO_PRICE, match=100, trusted=True, in_stock=True)
        assert regional_priced > foreign_perfect
        assert regional_priced > regional_unpriced


# ── score_candidate ───────────────────────────────────────────────────────────

class TestScoreCandidate:
    def test_fields_wired(self):
        c = score_candidate("boAt Nirvana Ion", _rec(), index=3)
        assert c is not None
        assert c.index == 3
        assert c.price.min == 1499
        assert c.price.confidence == 85
        assert c.region_ok is True
        assert c.trusted is True
        assert c.match_score == 95
        assert c.in_stock is True
        assert c.stock is StockStatus.UNKNOWN
        assert c.currency == "INR"
        assert c.score == 80 + 110 + 28.5 + 20 + 10
        assert c.title == "boAt Nirvana Ion TWS Earbuds"

    def test_stock_signal_read_once(self):
        record = _rec(availability="Out of stock")
        with patch("reconcile.scorer.stock_signal", wraps=stock_signal) as signal:
            c = score_candidate("boAt Nirvana Ion", record)
        signal.assert_called_once()
        assert c.stock is StockStatus.OUT_OF_STOCK
        assert c.in_stock is False

    def test_blacklisted_is_vetoed(self):
        record = _rec(product_link="https://www.aliexpress.com/item/1.html", source="AliExpress", price="₹99")
        assert score_candidate("boAt Nirvana Ion", record) is None

    def test_non_dict_is_skipped(self):
        assert score_candidate("boAt Nirvana Ion", "not a record") is None

    def test_missing_title(self):
        c = score_candidate("boAt Nirvana Ion", _rec(title=None))
        assert c.match_score == 0
        assert c.title == ""


# ── rank_candidates ───────────────────────────────────────────────────────────

class TestRankCandidates:
    def test_regional_priced_beats_cheaper_foreign(self):
        records = [
            _rec(product_link="https://www.amazon.com/dp/B0", source="Amazon.com", price="$15"),
            _rec(),
        ]
        ranked = rank_candidates("boAt Nirvana Ion", records)
        assert [c.index for c in ranked] == [1, 0]

    def test_priced_beats_unpriced(self):
        records = [_rec(price=None), _rec()]
        ranked = rank_candidates("boAt Nirvana Ion", records)
        assert [c.index for c in ranked] == [1, 0]

    def test_ties_keep_original_order(self):
        records = [_rec(product_link=f"https://www.flipkart.com/p/{i}") for i in range(4)]
        ranked = rank_candidates("boAt Nirvana Ion", records)
        assert [c.index for c in ranked] == [0, 1, 2, 3]

    def test_vetoed_and_junk_removed(self):
        records = [
            _rec(product_link="https://www.temu.com/x", source="Temu"),
            None,
            42,
            _rec(),
        ]
        ranked = rank_candidates("boAt Nirvana Ion", records)
        assert [c.index for c in ranked] == [3]

    def test_empty_input(self):
        assert rank_candidates("boAt Nirvana Ion", []) == []
        assert rank_candidates("boAt Nirvana Ion", None) == []
