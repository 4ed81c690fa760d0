"""
main.py: Single entry point.

Prices one product photo and prints the result as JSON:

  python main.py photo.jpg
  python main.py https://example.com/photo.jpg

A failed scan still prints a result (name "Scan Failed", confidence 0) and
exits with status 1.
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import scan
from errors import ScanError

logging.basicConfig(
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    level=logging.INFO,
    handlers=[logging.StreamHandler(sys.stderr)],
)
logging.getLogger("aiohttp").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("google_genai").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


async def run(target: str) -> tuple[dict, bool]:
    image_url = target if target.startswith(("http://", "https://")) else None
    try:
        if image_url:
            result = await scan.scan_image_url(image_url)
        else:
            result = await scan.scan_image(Path(target).read_bytes())
        return result.to_dict(), True
    except ScanError as exc:
        logger.error("Scan failed: %s", exc)
        return scan.fallback_result(exc, image_url).to_dict(), False


def main() -> None:
    parser = argparse.ArgumentParser(description="Identify and price a product photo.")
    parser.add_argument("image", help="path to an image file, or a public image URL")
    args = parser.parse_args()

    if not args.image.startswith(("http://", "https://")) and not Path(args.image).is_file():
        parser.error(f"no such file: {args.image}")

    try:
        result, ok = asyncio.run(run(args.image))
    except KeyboardInterrupt:
        sys.exit(130)

    print(json.dumps(result, ensure_ascii=False, indent=2))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
