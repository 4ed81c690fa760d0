"""
Tests for key_store.py.

Covers:
  - get(): env lookup, uppercase mapping, blank values
  - require(): returns values in order, MissingCredentials lists every gap
  - get_all_keys(): returns all known key names
  - mask(): various masking scenarios
"""
from __future__ import annotations

import pytest

import key_store
from errors import MissingCredentials, ScanError


# ── get() ─────────────────────────────────────────────────────────────────────

class TestGet:
    def test_env_var_name_is_uppercased(self, monkeypatch):
        monkeypatch.setenv("SERPAPI_API_KEY", "serp-value")
        assert key_store.get("serpapi_api_key") == "serp-value"

    def test_returns_none_when_not_set(self):
        assert key_store.get("serpapi_api_key") is None

    def test_blank_value_is_none(self, monkeypatch):
        monkeypatch.setenv("IMGBB_API_KEY", "   ")
        assert key_store.get("imgbb_api_key") is None


# ── require() ─────────────────────────────────────────────────────────────────

class TestRequire:
    def test_returns_values_in_order(self, monkeypatch):
        monkeypatch.setenv("SERPAPI_API_KEY", "serp")
        monkeypatch.setenv("IMGBB_API_KEY", "imgbb")
        assert key_store.require("imgbb_api_key", "serpapi_api_key") == ["imgbb", "serp"]

    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.setenv("SERPAPI_API_KEY", "serp")
        with pytest.raises(MissingCredentials) as info:
            key_store.require("serpapi_api_key", "imgbb_api_key")
        assert info.value.missing == ["imgbb_api_key"]
        assert "IMGBB_API_KEY" in str(info.value)

    def test_lists_every_missing_key(self):
        with pytest.raises(MissingCredentials) as info:
            key_store.require("serpapi_api_key", "imgbb_api_key")
        assert info.value.missing == ["serpapi_api_key", "imgbb_api_key"]

    def test_is_a_scan_error(self):
        with pytest.raises(ScanError):
            key_store.require("google_api_key")


# ── get_all_keys() ────────────────────────────────────────────────────────────

class TestGetAllKeys:
    def test_contains_all_known_keys(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "g")
        keys = key_store.get_all_keys()
        assert set(keys) == set(key_store.KNOWN_KEYS)
        assert keys["google_api_key"] == "g"
        assert keys["serpapi_api_key"] is None


# ── mask() ────────────────────────────────────────────────────────────────────

class TestMask:
    def test_none_is_not_set(self):
        assert key_store.mask(None) == "not set"

    def test_short_value_fully_hidden(self):
        assert key_store.mask("abc") == "****"

    def test_long_value_keeps_ends(self):
        assert key_store.mask("abcd1234567890wxyz") == "abcd**********wxyz"
