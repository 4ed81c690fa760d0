"""
Price extractor: mines one raw shopping record for a min/max price.

Shopping records are loosely structured: the price may be a number, a string
("₹1,499 – ₹1,999"), a nested object ({"value": "₹1,499", "extracted_value":
1499}) or buried somewhere else entirely. Search order, first hit wins:

  tier  where                                       confidence
  1     numeric field from tables.price_fields          95
  2     string field from tables.price_fields           85
  3     objects under tables.price_fields, and          80
        elements of tables.nested_price_fields
  4     any other nested object / short string     70 - 5 per level

Tier 4 strings must carry a currency marker on the amount itself, otherwise
ratings, years and pack sizes would be picked up as prices.

Recursion is bounded by MAX_DEPTH and by a visited set of object ids, so
self-referential records terminate.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, replace
from typing import Any, Optional

from errors import ParsingAnomaly
from reconcile.tables import DEFAULT_TABLES, ReconcileTables

logger = logging.getLogger(__name__)

TIER_NUMERIC  = 95
TIER_STRING   = 85
TIER_NESTED   = 80
TIER_SCAN     = 70
DEPTH_PENALTY = 5
MAX_DEPTH     = 6
SHORT_TEXT    = 60   # longer strings are prose, not prices


@dataclass(frozen=True)
class PriceExtraction:
    min: int
    max: int
    original_text: str
    confidence: int     # 0-100, see tier table above

    @property
    def found(self) -> bool:
        return self.min > 0


NO_PRICE = PriceExtraction(min=0, max=0, original_text="", confidence=0)


# ── String price parser ───────────────────────────────────────────────────────

_MARK = r"(?:₹|\brs\.?|\binr\b|\$|\busd\b|€|£)"
# "1,499" / "1,49,999" (Indian grouping) / "1499" / "1799.00"
_NUM  = r"\d{1,3}(?:,\d{2,3})+(?:\.\d+)?|\d+(?:\.\d+)?"
# a whole amount: not cut out of a longer number, not a percentage
_AMOUNT = rf"({_NUM})(?!\d|[.,]\d|\s*%)"
_SEP    = r"\s*(?:[-–—~]|\bto\b)\s*"

# Text with a currency marker: every amount must follow one (the high end of
# a range may drop it, "Rs 1499 - 1999"). Pack sizes, years and discounts in
# the same text never match.
_MARKED_RANGE_RE  = re.compile(rf"{_MARK}\s*{_AMOUNT}{_SEP}{_MARK}?\s*{_AMOUNT}", re.IGNORECASE)
_MARKED_SINGLE_RE = re.compile(rf"{_MARK}\s*{_AMOUNT}", re.IGNORECASE)
# Marker-free text ("1799.00" from a price field)
_BARE_RANGE_RE    = re.compile(rf"(?<![\d.,]){_AMOUNT}{_SEP}{_AMOUNT}")
_BARE_SINGLE_RE   = re.compile(rf"(?<![\d.,]){_AMOUNT}")
_MARKER_RE = re.compile(_MARK, re.IGNORECASE)
_UNAVAILABLE_RE = re.compile(
    r"out\s+of\s+stock|sold\s+out|unavailable|not\s+available",
    re.IGNORECASE,
)


def _to_units(number: str) -> int:
    """'1,499.50' → 1500 (half rounds up)."""
    return int(math.floor(float(number.replace(",", "")) + 0.5))


def parse_price_text(text: Any, require_marker: bool = False) -> Optional[tuple[int, int]]:
    """
    Parse a price string into (min, max) whole currency units.

    Ranges are tried before single prices:
        "Rs. 1,499 - Rs. 1,999" → (1499, 1999)
        "₹1,799"                → (1799, 1799)
        "1799.00"               → (1799, 1799)
        "Pack of 2 ₹999"        → (999, 999)
        "₹1,499 - 20% off"      → (1499, 1499)

    Returns None when no positive price is present.
    Raises ParsingAnomaly for explicit "out of stock" / "unavailable" text.
    """
    if not isinstance(text, str) or not text.strip():
        return None
    if _UNAVAILABLE_RE.search(text):
        raise ParsingAnomaly(f"price text marks listing unavailable: {text!r}")
    marked = bool(_MARKER_RE.search(text))
    if require_marker and not marked:
        return None
    range_re, single_re = (
        (_MARKED_RANGE_RE, _MARKED_SINGLE_RE) if marked else (_BARE_RANGE_RE, _BARE_SINGLE_RE)
    )

    for m in range_re.finditer(text):
        low, high = sorted((_to_units(m.group(1)), _to_units(m.group(2))))
        if low > 0:
            return low, high

    for m in single_re.finditer(text):
        value = _to_units(m.group(1))
        if value > 0:
            return value, value
    return None


# ── Record extractor ──────────────────────────────────────────────────────────

def extract_price(record: Any, tables: ReconcileTables = DEFAULT_TABLES) -> PriceExtraction:
    """Return the best PriceExtraction for record, or NO_PRICE."""
    if not isinstance(record, dict):
        return NO_PRICE
    return _search(record, tables, depth=0, visited=set()) or NO_PRICE


def _search(
    node: dict, tables: ReconcileTables, depth: int, visited: set[int],
) -> Optional[PriceExtraction]:
    if depth > MAX_DEPTH or id(node) in visited:
        return None
    visited.add(id(node))
    return (
        _direct_numeric(node, tables)
        or _direct_text(node, tables)
        or _nested_collections(node, tables, depth, visited)
        or _scan(node, tables, depth, visited)
    )


def _numeric(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return int(math.floor(value + 0.5)) or None


def _text(value: str, confidence: int, require_marker: bool = False) -> Optional[PriceExtraction]:
    try:
        parsed = parse_price_text(value, require_marker=require_marker)
    except ParsingAnomaly as exc:
        logger.debug("Ignoring price text: %s", exc)
        return None
    if not parsed:
        return None
    return PriceExtraction(min=parsed[0], max=parsed[1], original_text=value.strip(), confidence=confidence)


def _direct_numeric(node: dict, tables: ReconcileTables) -> Optional[PriceExtraction]:
    for name in tables.price_fields:
        units = _numeric(node.get(name))
        if units:
            return PriceExtraction(min=units, max=units, original_text=str(node[name]), confidence=TIER_NUMERIC)
    return None


def _direct_text(node: dict, tables: ReconcileTables) -> Optional[PriceExtraction]:
    for name in tables.price_fields:
        value = node.get(name)
        if isinstance(value, str):
            found = _text(value, TIER_STRING)
            if found:
                return found
    return None


def _nested_collections(
    node: dict, tables: ReconcileTables, depth: int, visited: set[int],
) -> Optional[PriceExtraction]:
    for name in tables.price_fields + tables.nested_price_fields:
        items = node.get(name)
        if isinstance(items, dict):
            items = [items]
        if not isinstance(items, (list, tuple)) or id(items) in visited:
            continue
        visited.add(id(items))
        for element in items:
            found = _element(element, tables, depth + 1, visited)
            if found:
                return replace(found, confidence=TIER_NESTED)
    return None


def _element(
    element: Any, tables: ReconcileTables, depth: int, visited: set[int],
) -> Optional[PriceExtraction]:
    if isinstance(element, dict):
        return _search(element, tables, depth, visited)
    if isinstance(element, str):
        return _text(element, TIER_NESTED)
    units = _numeric(element)
    if units:
        return PriceExtraction(min=units, max=units, original_text=str(element), confidence=TIER_NESTED)
    return None


def _scan_confidence(level: int) -> int:
    return TIER_SCAN - DEPTH_PENALTY * level


def _cap(found: PriceExtraction, ceiling: int) -> PriceExtraction:
    return replace(found, confidence=min(found.confidence, ceiling))


def _scan(
    node: dict, tables: ReconcileTables, depth: int, visited: set[int],
) -> Optional[PriceExtraction]:
    """Tier 4: walk everything not already tried, shallowest first per field."""
    for key, value in node.items():
        if key in tables.non_price_fields:
            continue
        if isinstance(value, str):
            if key in tables.price_fields or len(value) > SHORT_TEXT:
                continue
            found = _text(value, _scan_confidence(depth), require_marker=True)
        elif isinstance(value, dict):
            found = _search(value, tables, depth + 1, visited)
            found = found and _cap(found, _scan_confidence(depth + 1))
        elif isinstance(value, (list, tuple)):
            found = _scan_sequence(value, tables, depth + 1, visited)
            found = found and _cap(found, _scan_confidence(depth + 1))
        else:
            continue
        if found:
            return found
    return None


def _scan_sequence(
    items: list | tuple, tables: ReconcileTables, depth: int, visited: set[int],
) -> Optional[PriceExtraction]:
    if depth > MAX_DEPTH or id(items) in visited:
        return None
    visited.add(id(items))
    for element in items:
        if isinstance(element, dict):
            found = _search(element, tables, depth, visited)
        elif isinstance(element, str) and len(element) <= SHORT_TEXT:
            found = _text(element, _scan_confidence(depth), require_marker=True)
        else:
            continue
        if found:
            return found
    return None
