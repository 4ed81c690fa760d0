"""
Central configuration: reads from .env file.

Every setting has a sensible default for the Indian market (₹ / amazon.in /
flipkart), so nothing here is required to import the package.
API keys are NOT read here; they go through key_store.py so that a missing key
surfaces as MissingCredentials at scan time, not as a KeyError at import time.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("true", "1", "yes")


def _csv(name: str) -> tuple[str, ...]:
    return tuple(
        x.strip().lower()
        for x in os.getenv(name, "").split(",")
        if x.strip()
    )


# ── Target market ─────────────────────────────────────────────────────────────
# Passed to the shopping search as region/currency hints and used by the
# reconciliation engine to decide which listings are "region-matched".
TARGET_COUNTRY: str  = os.getenv("TARGET_COUNTRY", "in")
TARGET_LANGUAGE: str = os.getenv("TARGET_LANGUAGE", "en")
TARGET_CURRENCY: str = os.getenv("TARGET_CURRENCY", "INR")
CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "₹")

# ── Reconciliation policy ─────────────────────────────────────────────────────
# Alternates: up to MAX_ALTERNATES region-matched priced listings, then up to
# MAX_EXTRA_ALTERNATES more priced listings from anywhere.
MAX_ALTERNATES: int       = int(os.getenv("MAX_ALTERNATES", "5"))
MAX_EXTRA_ALTERNATES: int = int(os.getenv("MAX_EXTRA_ALTERNATES", "3"))

# Canonical names keep at most this many meaningful tokens (brand + model)
MAX_NAME_TOKENS: int = int(os.getenv("MAX_NAME_TOKENS", "5"))

# What to assume when a listing has no stock signal AND no price.
#   false → out of stock (conservative, default)
#   true  → in stock (optimistic)
UNKNOWN_STOCK_IN_STOCK: bool = _flag("UNKNOWN_STOCK_IN_STOCK")

# Comma-separated additions to the built-in seller tables, e.g.
#   EXTRA_TRUSTED_DOMAINS=shopclues.com,poorvika.com
EXTRA_TRUSTED_DOMAINS: tuple[str, ...] = _csv("EXTRA_TRUSTED_DOMAINS")
EXTRA_BLOCKED_DOMAINS: tuple[str, ...] = _csv("EXTRA_BLOCKED_DOMAINS")

# ── Optional LLM name cleanup ─────────────────────────────────────────────────
# When enabled (and google_api_key is set) the raw visual-match title is
# cleaned by Gemini before the deterministic sanitizer runs over it.
LLM_NAME_CLEANUP: bool = _flag("LLM_NAME_CLEANUP")
GEMINI_MODEL: str      = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

# ── Network ───────────────────────────────────────────────────────────────────
HTTP_TIMEOUT_SECS: float = float(os.getenv("HTTP_TIMEOUT_SECS", "30"))
