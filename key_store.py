"""
key_store.py: single source of truth for all API keys.

Keys are read from the environment (or .env, loaded by config.py) on every
call, so exporting a new key takes effect on the next scan without a restart.

Key names (env vars are the uppercase equivalent):
  serpapi_api_key  →  SERPAPI_API_KEY   Google Lens + Google Shopping
  imgbb_api_key    →  IMGBB_API_KEY     image hosting (only for raw uploads)
  google_api_key   →  GOOGLE_API_KEY    Gemini name cleanup (optional)
"""
from __future__ import annotations

import logging
import os
from typing import Optional

import config  # noqa: F401  (loads .env)
from errors import MissingCredentials

logger = logging.getLogger(__name__)

KNOWN_KEYS = (
    "serpapi_api_key",
    "imgbb_api_key",
    "google_api_key",
)


def get(key_name: str) -> Optional[str]:
    """Return the value for key_name, or None if it is unset or blank."""
    value = os.getenv(key_name.upper(), "").strip()
    return value or None


def require(*key_names: str) -> list[str]:
    """
    Return the values for key_names in order.
    Raises MissingCredentials naming every key that is absent.
    """
    values = [get(name) for name in key_names]
    missing = [name for name, value in zip(key_names, values) if not value]
    if missing:
        logger.error("Missing credentials: %s", ", ".join(missing))
        raise MissingCredentials(missing)
    return values  # type: ignore[return-value]


def get_all_keys() -> dict[str, Optional[str]]:
    """Return all known keys with their current values."""
    return {name: get(name) for name in KNOWN_KEYS}


def mask(value: Optional[str]) -> str:
    """Return a masked version safe to write to logs."""
    if not value:
        return "not set"
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}{'*' * (len(value) - 8)}{value[-4:]}"
