"""
Product name extraction with fallback.

Stage 1 reads the structured title element. Stage 2 derives the name from
the page <title> by stripping the site's brand suffix. When both yield
nothing, the sentinel NAME_SCRAPE_ERROR is used so the record is always
complete. Each stage returns Optional[str]; only extract_name decides the
order.
"""

from __future__ import annotations

import re
from typing import Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from shared.logging import get_logger
from scraper.extract.constants import (
    DEFAULT_NAME_SELECTOR,
    DEFAULT_NAME_TIMEOUT_MS,
    DEFAULT_TITLE_SUFFIX,
    NAME_SCRAPE_ERROR,
)
from scraper.extract.text import non_empty

logger = get_logger(__name__)

# Whole title, up to end of string.
TITLE_PATTERN = re.compile(r"^(.*)$", re.DOTALL)


async def read_structured_name(
    page: Page,
    *,
    selector: str = DEFAULT_NAME_SELECTOR,
    timeout_ms: int = DEFAULT_NAME_TIMEOUT_MS,
) -> Optional[str]:
    """Stage 1: text of the structured title element, or None on any miss."""
    try:
        text = await page.locator(selector).first.text_content(timeout=timeout_ms)
    except PlaywrightError as e:
        logger.warning(
            "name_selector_failed",
            selector=selector,
            error=str(e),
            error_type=type(e).__name__,
        )
        return None
    return non_empty(text)


def name_from_title(title: Optional[str], *, suffix: str = DEFAULT_TITLE_SUFFIX) -> Optional[str]:
    """Stage 2: page title with the brand suffix stripped, or None."""
    if not title:
        return None
    match = TITLE_PATTERN.match(title)
    if not match:
        return None
    name = match.group(1)
    if suffix and name.endswith(suffix):
        name = name[: -len(suffix)]
    return non_empty(name)


async def extract_name(
    page: Page,
    title: Optional[str],
    *,
    selector: str = DEFAULT_NAME_SELECTOR,
    suffix: str = DEFAULT_TITLE_SUFFIX,
    timeout_ms: int = DEFAULT_NAME_TIMEOUT_MS,
) -> str:
    """
    Return the product name; never raises and never returns an empty string.

    A non-empty stage 1 result always wins; the title is consulted only
    when stage 1 misses.
    """
    name = await read_structured_name(page, selector=selector, timeout_ms=timeout_ms)
    if name:
        logger.info("name_extracted", name=name, source="selector")
        return name

    name = name_from_title(title, suffix=suffix)
    if name:
        logger.info("name_fallback_used", name=name, source="title", title=title)
        return name

    logger.error("name_scrape_error", selector=selector, title=title)
    return NAME_SCRAPE_ERROR
