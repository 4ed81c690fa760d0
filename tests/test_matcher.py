"""
Tests for reconcile/matcher.py: title match bands.
"""
from __future__ import annotations

import pytest

from reconcile.matcher import match_score


class TestMatchScore:
    def test_exact_is_100(self):
        assert match_score("boAt Nirvana Ion", "boAt Nirvana Ion") == 100

    def test_exact_ignores_case_and_spacing(self):
        assert match_score("boAt Nirvana Ion", "  BOAT  nirvana ion ") == 100

    def test_all_tokens_is_95(self):
        assert match_score("boAt Nirvana Ion", "boAt Nirvana Ion TWS Earbuds") == 95

    def test_three_of_four_is_85(self):
        assert match_score("Sony WH-1000XM5 Wireless Headphones", "Sony WH-1000XM5 Headphones Black") == 85

    def test_half_is_70(self):
        assert match_score("Samsung Galaxy Buds2 Pro", "Samsung Galaxy Watch") == 70

    def test_below_half_is_zero(self):
        assert match_score("Philips Series HD9252 Air Fryer", "Philips Air Purifier") == 0

    def test_single_token_match_is_zero(self):
        assert match_score("boAt Nirvana Ion", "boAt Airdopes 141") == 0

    def test_substring_either_direction(self):
        # "earbud" ⊂ "earbuds", "nirvanaion" ⊃ "nirvana"
        assert match_score("Nirvana Earbud", "NirvanaIon Earbuds") == 95

    def test_short_tokens_ignored(self):
        # "Ion" survives (3 chars); "X" and "5" are dropped from both sides
        assert match_score("X Nirvana Ion 5", "Nirvana Ion") == 95

    @pytest.mark.parametrize("name, title", [("", "boAt"), ("boAt Ion", ""), ("ab cd", "ab cd ef")])
    def test_degenerate_inputs(self, name, title):
        assert match_score(name, title) == 0
