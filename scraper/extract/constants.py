"""
Extraction constants: selectors, sentinel, title literals, timeouts, screenshot geometry.

Configurable defaults are defined next to ExtractionConfig and re-exported
here for the extraction functions' keyword defaults; the values actually
used at runtime come from ExtractionConfig.
"""

from __future__ import annotations

from types import MappingProxyType

from shared.config import (  # noqa: F401
    DEFAULT_NAME_SELECTOR,
    DEFAULT_NAME_TIMEOUT_MS,
    DEFAULT_PRICE_CONTAINER_SELECTOR,
    DEFAULT_PRICE_FRAGMENT_SELECTOR,
    DEFAULT_SCREENSHOT_CROP_TOP_PX,
    DEFAULT_SCREENSHOT_SCALE,
    DEFAULT_SELECTOR_TIMEOUT_MS,
    DEFAULT_TITLE_SUFFIX,
    DEFAULT_VIEWPORT_HEIGHT,
    DEFAULT_VIEWPORT_WIDTH,
)

# Written into the record when neither name stage yields text.
NAME_SCRAPE_ERROR = "NAME_SCRAPE_ERROR"

# Page titles served by the anti-bot layer.
BLOCKED_TITLE = "Blocked"
SUSPECT_TITLE = "Not sure if blocked, might also be a connection error"

SCREENSHOT_TIMEOUT_MS = 15_000

# Read-only; copy before handing to Playwright.
DEFAULT_VIEWPORT = MappingProxyType(
    {"width": DEFAULT_VIEWPORT_WIDTH, "height": DEFAULT_VIEWPORT_HEIGHT}
)

SCREENSHOT_ENCODING = "base64"
SCREENSHOT_MIME_TYPE = "image/png"
