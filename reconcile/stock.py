"""
Stock classifier.

Order of evidence:
  1. explicit availability fields (bool, number or text)
  2. out-of-stock phrasing in title / snippet / extensions
  3. a positive extracted price → in stock (feeds drop prices for
     unavailable items)
  4. tables.unknown_stock_in_stock (False by default)
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Any

from reconcile.price_extractor import PriceExtraction
from reconcile.tables import DEFAULT_TABLES, ReconcileTables

_OUT_RE = re.compile(
    r"out[\s_-]*of[\s_-]*stock|sold[\s_-]*out|discontinued|unavailable|not[\s_-]+available|no[\s_-]+longer[\s_-]+available",
    re.IGNORECASE,
)
_IN_RE = re.compile(r"in[\s_-]*stock|available", re.IGNORECASE)


class StockStatus(str, Enum):
    IN_STOCK     = "in_stock"
    OUT_OF_STOCK = "out_of_stock"
    UNKNOWN      = "unknown"


def _from_value(value: Any) -> StockStatus:
    if isinstance(value, bool):
        return StockStatus.IN_STOCK if value else StockStatus.OUT_OF_STOCK
    if isinstance(value, (int, float)):
        return StockStatus.IN_STOCK if value > 0 else StockStatus.OUT_OF_STOCK
    if isinstance(value, str):
        if _OUT_RE.search(value):
            return StockStatus.OUT_OF_STOCK
        if _IN_RE.search(value):
            return StockStatus.IN_STOCK
    return StockStatus.UNKNOWN


def _invert(status: StockStatus) -> StockStatus:
    if status is StockStatus.IN_STOCK:
        return StockStatus.OUT_OF_STOCK
    if status is StockStatus.OUT_OF_STOCK:
        return StockStatus.IN_STOCK
    return status


def _text_of(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return " ".join(v for v in value if isinstance(v, str))
    return ""


def stock_signal(record: dict, tables: ReconcileTables = DEFAULT_TABLES) -> StockStatus:
    """What the record itself says about stock, without any defaulting."""
    for name in tables.stock_fields:
        if name not in record:
            continue
        status = _from_value(record[name])
        if name in tables.inverted_stock_fields and not isinstance(record[name], str):
            status = _invert(status)
        if status is not StockStatus.UNKNOWN:
            return status

    text = " ".join(_text_of(record.get(name)) for name in tables.stock_text_fields)
    if _OUT_RE.search(text):
        return StockStatus.OUT_OF_STOCK
    return StockStatus.UNKNOWN


def stock_from_signal(
    status: StockStatus,
    price: PriceExtraction,
    tables: ReconcileTables = DEFAULT_TABLES,
) -> bool:
    """Collapse a stock signal to in/out, defaulting on price then policy."""
    if status is not StockStatus.UNKNOWN:
        return status is StockStatus.IN_STOCK
    if price.found:
        return True
    return tables.unknown_stock_in_stock


def classify_stock(
    record: dict,
    price: PriceExtraction,
    tables: ReconcileTables = DEFAULT_TABLES,
) -> bool:
    return stock_from_signal(stock_signal(record, tables), price, tables)
