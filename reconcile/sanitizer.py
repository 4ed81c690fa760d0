"""
Name sanitizer: turns a noisy visual-match title into a short canonical name.

  "boAt Nirvana Ion TWS Earbuds | Buy Online at ₹1,499 - Amazon.in"
      → "boAt Nirvana Ion TWS Earbuds"

Steps:
  1. cut at the first variant separator ("::", "|", or a spaced dash
     followed by lowercase text)
  2. drop noise tokens (platforms, "review"/"unboxing", ₹/Rs/INR, filler)
  3. keep the first N tokens that are not bare numbers or currency symbols
  4. fewer than 2 survivors → the cut text; empty cut text → the raw title
"""
from __future__ import annotations

import re

from reconcile.tables import DEFAULT_TABLES, ReconcileTables

# "::" | "|" | " - lowercase…" / " – lowercase…"
_SEPARATOR_RE   = re.compile(r"::|\||\s[-–—]\s*(?=[a-z])")
_WHITESPACE_RE  = re.compile(r"\s+")
_EDGE_PUNCT     = ".,:;!?()[]{}\"'“”‘’*"
_PURE_NUMBER_RE = re.compile(r"^\d+(?:[.,]\d+)*$")
_CURRENCY_RE    = re.compile(r"^[₹$€£¥]+$")
# Inline price fragments like "₹1,499" or "Rs.999"
_PRICE_TOKEN_RE = re.compile(r"^(?:₹|rs\.?|inr|\$)\s*\d[\d,]*(?:\.\d+)?/?-?$", re.IGNORECASE)


def _cut_at_separator(text: str) -> str:
    head = _SEPARATOR_RE.split(text, maxsplit=1)[0]
    return _WHITESPACE_RE.sub(" ", head).strip()


def _is_noise(token: str, noise: frozenset[str]) -> bool:
    bare = token.strip(_EDGE_PUNCT).lower()
    if not any(ch.isalnum() for ch in bare):
        return True
    return bare in noise or bool(_PRICE_TOKEN_RE.match(bare))


def _is_meaningful(token: str) -> bool:
    bare = token.strip(_EDGE_PUNCT)
    return bool(bare) and not _PURE_NUMBER_RE.match(bare) and not _CURRENCY_RE.match(bare)


def sanitize_name(raw_title: str, tables: ReconcileTables = DEFAULT_TABLES) -> str:
    """Return the canonical product name for raw_title. Pure and deterministic."""
    if not raw_title:
        return raw_title

    cut = _cut_at_separator(raw_title)
    kept = [t for t in cut.split(" ") if t and not _is_noise(t, tables.noise_words)]
    tokens = [t.strip(_EDGE_PUNCT) for t in kept if _is_meaningful(t)]
    tokens = tokens[: tables.max_name_tokens]

    if len(tokens) >= 2:
        return " ".join(tokens)
    return cut or raw_title
