"""
Trust & region classifier.

trusted    → link/source mentions an approved seller
blocked    → link/source mentions a cross-border marketplace. This is a hard
             veto: blocked listings are dropped before scoring.
region_ok  → listing is priced in / sold into the target market:
               foreign currency in the price text    → False
               regional host (".in", domestic .com)  → True
               target currency and no foreign host   → True
               anything else                         → False
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urlparse

from reconcile.tables import DEFAULT_TABLES, ReconcileTables

UNKNOWN_CURRENCY = "unknown"


@dataclass(frozen=True)
class SourceVerdict:
    trusted: bool
    blocked: bool
    region_ok: bool
    currency: str       # ISO code or "unknown"


def detect_currency(text: Optional[str], tables: ReconcileTables = DEFAULT_TABLES) -> str:
    """Return the ISO code of the first currency pattern found in text."""
    if not text:
        return UNKNOWN_CURRENCY
    for cur in tables.currencies:
        if cur.pattern.search(text):
            return cur.code
    return UNKNOWN_CURRENCY


def record_link(record: dict, tables: ReconcileTables = DEFAULT_TABLES) -> str:
    for name in tables.link_fields:
        value = record.get(name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def record_source(record: dict, tables: ReconcileTables = DEFAULT_TABLES) -> str:
    for name in tables.source_fields:
        value = record.get(name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def link_host(link: str) -> str:
    """'https://www.Flipkart.com/x?y' → 'www.flipkart.com' ('' if unparseable)."""
    if not link:
        return ""
    parsed = urlparse(link if "//" in link else f"//{link}")
    return (parsed.hostname or "").lower()


def _host_matches(host: str, domains: tuple[str, ...]) -> bool:
    for domain in domains:
        if domain.startswith("."):
            if host.endswith(domain):
                return True
        elif host == domain or host.endswith("." + domain):
            return True
    return False


def classify_source(
    record: dict,
    price_text: str = "",
    tables: ReconcileTables = DEFAULT_TABLES,
) -> SourceVerdict:
    link   = record_link(record, tables)
    source = record_source(record, tables)
    haystack = f"{link} {source}".lower()

    blocked = any(name in haystack for name in tables.blocked_sellers)
    trusted = not blocked and any(name in haystack for name in tables.trusted_sellers)

    currency = detect_currency(f"{_raw_price_text(record, tables)} {price_text}".strip(), tables)
    host = link_host(link)

    if currency not in (tables.target_currency, UNKNOWN_CURRENCY):
        region_ok = False
    elif host and _host_matches(host, tables.regional_domains):
        region_ok = True
    elif currency == tables.target_currency:
        region_ok = not (host and _host_matches(host, tables.foreign_domains))
    else:
        region_ok = False

    return SourceVerdict(trusted=trusted, blocked=blocked, region_ok=region_ok, currency=currency)


def _raw_price_text(record: dict, tables: ReconcileTables) -> str:
    for name in tables.price_fields:
        value: Any = record.get(name)
        if isinstance(value, str):
            return value
    return ""
