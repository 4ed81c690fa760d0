"""
Google Gemini name cleaner: uses the google-genai SDK (v1 API).

Text-only, temperature 0, tiny output: a call costs a fraction of a cent on
gemini-2.0-flash and usually returns in well under a second.
"""
from __future__ import annotations

import logging
import time
from typing import Optional

from google import genai
from google.genai import types as genai_types

from providers.base import (
    SYSTEM_PROMPT, NameCleaner, build_user_prompt, parse_json_response,
)

logger = logging.getLogger(__name__)


class GeminiNameCleaner(NameCleaner):

    def __init__(self, api_key: str, model: str = "gemini-2.0-flash"):
        self.name     = "google"
        self.model_id = model
        # Force v1 (stable) API
        self._client  = genai.Client(api_key=api_key, http_options={"api_version": "v1"})

    async def clean(self, raw_title: str, alternatives: Optional[list[str]] = None) -> Optional[str]:
        gen_config = genai_types.GenerateContentConfig(
            system_instruction=SYSTEM_PROMPT,
            temperature=0,
            max_output_tokens=64,
        )

        t0 = time.monotonic()
        response = await self._client.aio.models.generate_content(
            model=self.model_id,
            contents=[build_user_prompt(raw_title, alternatives)],
            config=gen_config,
        )
        latency_ms = int((time.monotonic() - t0) * 1000)

        data = parse_json_response(response.text, self.full_name)
        name = data.get("product_name")
        logger.info("[%s] cleaned %r → %r in %dms", self.full_name, raw_title, name, latency_ms)
        if isinstance(name, str) and name.strip():
            return name.strip()
        return None
