"""
Shared prompt, parser and base class for LLM name-cleanup providers.

A name cleaner turns a noisy visual-match title into "brand + model". It is
an optional augmentation: the deterministic sanitizer always runs over its
output anyway, and a failing cleaner never fails the scan.
"""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)

# ── Prompt (shared across all providers) ──────────────────────────────────────

SYSTEM_PROMPT = """You clean up product titles scraped from image search results.
Return ONLY a valid JSON object, no markdown, no prose.

JSON schema:
{
  "product_name": "brand + model only, at most 5 words, or null if unclear"
}

Rules:
- Drop store names, prices, "review", "unboxing", colours and pack sizes
- Keep model numbers exactly as written
- Never invent a brand that is not in the title
"""


def build_user_prompt(raw_title: str, alternatives: Optional[list[str]] = None) -> str:
    prompt = f"Title: {raw_title}"
    if alternatives:
        others = "\n".join(f"- {t}" for t in alternatives[:4])
        prompt += f"\n\nOther titles for the same photo:\n{others}"
    return prompt


def parse_json_response(raw: str, provider_name: str) -> dict:
    """
    Parse JSON from a model response, handling markdown fences gracefully.
    Raises ValueError on parse failure.
    """
    text = (raw or "").strip()
    # Strip ```json ... ``` or ``` ... ``` fences if present
    if text.startswith("```"):
        lines = text.split("\n")
        text = "\n".join(lines[1:-1] if lines[-1].strip() == "```" else lines[1:])
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.error("[%s] Non-JSON response: %s", provider_name, (raw or "")[:300])
        raise ValueError(f"[{provider_name}] JSON parse error: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"[{provider_name}] expected a JSON object, got {type(data).__name__}")
    return data


# ── Abstract base ──────────────────────────────────────────────────────────────

class NameCleaner(ABC):
    """Base class all name-cleanup providers must implement."""

    name: str           # e.g. "google"
    model_id: str       # e.g. "gemini-2.0-flash"

    @abstractmethod
    async def clean(self, raw_title: str, alternatives: Optional[list[str]] = None) -> Optional[str]:
        """Return a cleaned product name, or None if the model had no answer."""
        ...

    @property
    def full_name(self) -> str:
        return f"{self.name}/{self.model_id}"
