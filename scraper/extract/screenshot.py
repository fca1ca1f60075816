"""
Reference screenshot of the rendered product page.

The top banner is cropped off and the image is optionally downscaled
before being base64-encoded into the output record. Failures are not
retried here; they propagate so the crawl engine can retry the request.
"""

from __future__ import annotations

import io
from typing import Mapping, Optional

from PIL import Image
from playwright.async_api import Page

from shared.logging import get_logger
from scraper.errors import ScreenshotError
from scraper.extract.constants import (
    DEFAULT_SCREENSHOT_CROP_TOP_PX,
    DEFAULT_SCREENSHOT_SCALE,
    DEFAULT_VIEWPORT,
    SCREENSHOT_TIMEOUT_MS,
)
from scraper.extract.record import ScreenshotResult

logger = get_logger(__name__)


def screenshot_clip(viewport: Mapping[str, int], crop_top_px: int) -> dict[str, int]:
    """Clip region: full viewport width, starting below the cropped banner."""
    return {
        "x": 0,
        "y": crop_top_px,
        "width": viewport["width"],
        "height": viewport["height"] - crop_top_px,
    }


def downscale_png(png_bytes: bytes, scale: float) -> bytes:
    """Resize a PNG by scale (0 < scale <= 1); returns the input when scale is 1."""
    if scale >= 1:
        return png_bytes
    with Image.open(io.BytesIO(png_bytes)) as img:
        width, height = img.size
        target = (max(1, round(width * scale)), max(1, round(height * scale)))
        resized = img.resize(target, Image.LANCZOS)
        out = io.BytesIO()
        resized.save(out, format="PNG")
    return out.getvalue()


async def capture_screenshot(
    page: Page,
    *,
    viewport: Optional[Mapping[str, int]] = None,
    crop_top_px: int = DEFAULT_SCREENSHOT_CROP_TOP_PX,
    scale: float = DEFAULT_SCREENSHOT_SCALE,
    timeout_ms: int = SCREENSHOT_TIMEOUT_MS,
) -> ScreenshotResult:
    """Capture the clipped viewport as base64 PNG. Raises ScreenshotError."""
    if viewport is None:
        viewport = DEFAULT_VIEWPORT
    clip = screenshot_clip(viewport, crop_top_px)
    try:
        png_bytes = await page.screenshot(type="png", clip=clip, timeout=timeout_ms)
        png_bytes = downscale_png(png_bytes, scale)
    except Exception as e:
        logger.error(
            "screenshot_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise ScreenshotError(f"Screenshot capture failed: {type(e).__name__}") from e

    logger.info("screenshot_captured", size_bytes=len(png_bytes), clip=clip, scale=scale)
    return ScreenshotResult.from_png(png_bytes)

