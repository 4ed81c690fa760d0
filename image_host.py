"""
image_host.py: uploads a photo and returns a public URL for it.

Google Lens only accepts image URLs, so raw bytes from the camera are pushed
to ImgBB first. Images expire after IMAGE_EXPIRY_SECS; nothing is kept.

API docs: https://api.imgbb.com/
"""
from __future__ import annotations

import asyncio
import base64
import logging

import aiohttp

import config
from errors import UploadFailure

logger = logging.getLogger(__name__)

UPLOAD_URL        = "https://api.imgbb.com/1/upload"
IMAGE_EXPIRY_SECS = 600


async def upload_image(image_bytes: bytes, api_key: str) -> str:
    """
    Upload image_bytes to ImgBB and return the direct image URL.
    Raises UploadFailure on an HTTP error or a response without a URL.
    """
    if not image_bytes:
        raise UploadFailure("No image data to upload.")

    form = aiohttp.FormData()
    form.add_field("image", base64.b64encode(image_bytes).decode())

    try:
        async with aiohttp.ClientSession() as session:
            async with session.post(
                UPLOAD_URL,
                params={"key": api_key, "expiration": str(IMAGE_EXPIRY_SECS)},
                data=form,
                timeout=aiohttp.ClientTimeout(total=config.HTTP_TIMEOUT_SECS),
            ) as resp:
                if resp.status != 200:
                    text = await resp.text()
                    raise UploadFailure(f"ImgBB error {resp.status}: {text[:200]}")
                data = await resp.json()
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        raise UploadFailure(f"ImgBB request failed: {exc}") from exc

    url = ((data or {}).get("data") or {}).get("url")
    if not url:
        raise UploadFailure("ImgBB response did not include an image URL.")
    logger.info("Uploaded %d bytes → %s", len(image_bytes), url)
    return url
