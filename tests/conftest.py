"""
Shared pytest fixtures.

Every test starts with no API keys in the environment and default config
values, so tests are isolated from a developer's real .env.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ── Make the project root importable without installing the package ────────────
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Strip credentials and reset config flags for every test."""
    import config
    import key_store
    import scan

    for name in key_store.KNOWN_KEYS:
        monkeypatch.delenv(name.upper(), raising=False)
    monkeypatch.setattr(config, "LLM_NAME_CLEANUP", False)
    monkeypatch.setattr(scan, "_engine", None)
    yield


