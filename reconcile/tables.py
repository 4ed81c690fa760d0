"""
Constant tables used by the reconciliation engine.

Everything the engine needs to know about sellers, field names, currencies
and noise words lives in one frozen ReconcileTables instance. The engine
receives it as an argument, so tests can substitute their own tables
without patching module globals.

DEFAULT_TABLES targets the Indian market (₹, amazon.in, flipkart).
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace

import config


@dataclass(frozen=True)
class CurrencyPattern:
    code: str               # ISO code, e.g. "INR"
    symbol: str             # display symbol, e.g. "₹"
    pattern: re.Pattern


@dataclass(frozen=True)
class ReconcileTables:
    # ── Sellers ───────────────────────────────────────────────────────────────
    # Substring matches against the lower-cased link + source text.
    trusted_sellers: tuple[str, ...]
    # Cross-border marketplaces: hard veto, never scored.
    blocked_sellers: tuple[str, ...]

    # ── Region ────────────────────────────────────────────────────────────────
    # Host suffixes that put a listing in the target market (".in" or a
    # domestic retailer on a .com domain).
    regional_domains: tuple[str, ...]
    # Host suffixes known to sell in another market.
    foreign_domains: tuple[str, ...]
    # Ordered: target currency first, first match wins.
    currencies: tuple[CurrencyPattern, ...]
    target_currency: str

    # ── Record field names (priority order) ───────────────────────────────────
    price_fields: tuple[str, ...]
    nested_price_fields: tuple[str, ...]
    non_price_fields: frozenset[str]
    link_fields: tuple[str, ...]
    source_fields: tuple[str, ...]
    stock_fields: tuple[str, ...]
    inverted_stock_fields: frozenset[str]
    stock_text_fields: tuple[str, ...]

    # ── Name sanitizer ────────────────────────────────────────────────────────
    noise_words: frozenset[str]
    max_name_tokens: int

    # ── Policy ────────────────────────────────────────────────────────────────
    # Stock assumed when a listing has neither a stock signal nor a price.
    unknown_stock_in_stock: bool

    @property
    def target(self) -> CurrencyPattern:
        for cur in self.currencies:
            if cur.code == self.target_currency:
                return cur
        raise LookupError(f"No currency pattern for {self.target_currency}")


def _currency(code: str, symbol: str, pattern: str) -> CurrencyPattern:
    return CurrencyPattern(code=code, symbol=symbol, pattern=re.compile(pattern, re.IGNORECASE))


DEFAULT_TABLES = ReconcileTables(
    trusted_sellers=(
        "amazon.in",
        "flipkart",
        "croma",
        "reliancedigital",
        "tatacliq",
        "vijaysales",
        "myntra",
        "nykaa",
        "ajio",
        "jiomart",
        "boat-lifestyle",
        "snapdeal",
    ),
    blocked_sellers=(
        "aliexpress",
        "alibaba",
        "temu",
        "shein",
        "wish.com",
        "dhgate",
        "banggood",
        "ubuy",
        "desertcart",
    ),
    regional_domains=(
        ".in",
        "flipkart.com",
        "croma.com",
        "tatacliq.com",
        "vijaysales.com",
        "myntra.com",
        "nykaa.com",
        "ajio.com",
        "jiomart.com",
        "snapdeal.com",
        "boat-lifestyle.com",
    ),
    foreign_domains=(
        "amazon.com",
        "amazon.co.uk",
        "amazon.de",
        "amazon.ae",
        "ebay.com",
        "walmart.com",
        "bestbuy.com",
        "target.com",
        "newegg.com",
        ".co.uk",
        ".com.au",
    ),
    currencies=(
        _currency("INR", "₹", r"₹|\brs\.?(?=\s*\d)|\binr\b"),
        _currency("USD", "$", r"\$|\busd\b"),
        _currency("EUR", "€", r"€|\beur\b"),
        _currency("GBP", "£", r"£|\bgbp\b"),
        _currency("AED", "AED", r"\baed\b|د\.إ"),
    ),
    target_currency=config.TARGET_CURRENCY,
    price_fields=(
        "extracted_price",
        "extracted_value",
        "price",
        "amount",
        "current_price",
        "sale_price",
        "value",
    ),
    nested_price_fields=(
        "detected_values",
        "detected_extensions",
        "prices",
        "offers",
    ),
    non_price_fields=frozenset({
        "title",
        "link",
        "product_link",
        "url",
        "image",
        "thumbnail",
        "thumbnails",
        "serpapi_thumbnail",
        "rating",
        "reviews",
        "snippet",
        "position",
        "product_id",
        "source_icon",
        "delivery",
    }),
    link_fields=("link", "product_link", "url"),
    source_fields=("source", "domain", "merchant", "seller"),
    stock_fields=(
        "in_stock",
        "availability",
        "stock",
        "stock_status",
        "available",
        "is_available",
        "out_of_stock",
        "sold_out",
    ),
    inverted_stock_fields=frozenset({"out_of_stock", "sold_out"}),
    stock_text_fields=("title", "snippet", "extensions", "tag", "delivery"),
    noise_words=frozenset({
        # platforms
        "amazon", "amazon.in", "flipkart", "myntra", "croma", "meesho",
        "snapdeal", "ebay", "youtube", "instagram", "facebook", "pinterest",
        "reddit", "twitter",
        # content type
        "review", "reviews", "unboxing", "hands-on", "comparison", "vs",
        "video", "photos", "images", "specs", "specifications",
        # price markers
        "₹", "rs", "rs.", "inr", "mrp", "price", "prices", "offer", "offers",
        "deal", "deals", "sale", "discount",
        # filler
        "buy", "online", "india", "best", "new", "latest", "original",
        "genuine", "with", "for", "and", "the", "at", "in", "of", "on",
        "from", "to", "a", "an",
    }),
    max_name_tokens=config.MAX_NAME_TOKENS,
    unknown_stock_in_stock=config.UNKNOWN_STOCK_IN_STOCK,
)


def tables_from_config(base: ReconcileTables = DEFAULT_TABLES) -> ReconcileTables:
    """Return base with the EXTRA_*_DOMAINS settings folded in."""
    return replace(
        base,
        trusted_sellers=base.trusted_sellers + config.EXTRA_TRUSTED_DOMAINS,
        blocked_sellers=base.blocked_sellers + config.EXTRA_BLOCKED_DOMAINS,
    )
