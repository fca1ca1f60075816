"""
Single-page extraction pipeline for product pages.

Session health classification, price and name extraction, reference
screenshot, and record assembly, sequenced by handle_product_page.

Public API: re-exports the symbols used by the crawl engine and tests so
that `from scraper.extract import ...` is the one import path.
"""

from __future__ import annotations

from scraper.extract.constants import (
    BLOCKED_TITLE,
    DEFAULT_NAME_SELECTOR,
    DEFAULT_PRICE_CONTAINER_SELECTOR,
    DEFAULT_TITLE_SUFFIX,
    DEFAULT_VIEWPORT,
    NAME_SCRAPE_ERROR,
    SUSPECT_TITLE,
)
from scraper.extract.handler import handle_product_page
from scraper.extract.name import extract_name, name_from_title, read_structured_name
from scraper.extract.price import extract_price, join_price_fragments
from scraper.extract.record import OutputRecord, ScreenshotResult, assemble_record
from scraper.extract.screenshot import capture_screenshot, downscale_png, screenshot_clip
from scraper.extract.session_health import (
    SessionHandle,
    SessionHealth,
    apply_session_health,
    classify_session_health,
)

__all__ = [
    # constants
    "BLOCKED_TITLE",
    "SUSPECT_TITLE",
    "NAME_SCRAPE_ERROR",
    "DEFAULT_PRICE_CONTAINER_SELECTOR",
    "DEFAULT_NAME_SELECTOR",
    "DEFAULT_TITLE_SUFFIX",
    "DEFAULT_VIEWPORT",
    # session_health
    "SessionHealth",
    "SessionHandle",
    "classify_session_health",
    "apply_session_health",
    # price
    "extract_price",
    "join_price_fragments",
    # name
    "read_structured_name",
    "name_from_title",
    "extract_name",
    # screenshot
    "capture_screenshot",
    "screenshot_clip",
    "downscale_png",
    # record
    "ScreenshotResult",
    "OutputRecord",
    "assemble_record",
    # handler
    "handle_product_page",
]
