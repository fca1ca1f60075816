"""
Price extraction: the rendered price is split over several inline fragments
("$", "19", ".", "99") inside one container. Fragments are joined in DOM
order; order is significant and must never be sorted.
"""

from __future__ import annotations

from typing import Iterable, Optional

from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from shared.logging import get_logger
from scraper.errors import SelectorNotFoundError
from scraper.extract.constants import (
    DEFAULT_PRICE_CONTAINER_SELECTOR,
    DEFAULT_PRICE_FRAGMENT_SELECTOR,
    DEFAULT_SELECTOR_TIMEOUT_MS,
)

logger = get_logger(__name__)


def join_price_fragments(fragments: Iterable[Optional[str]]) -> str:
    """Concatenate non-empty fragments in the given order, no separator."""
    return "".join(fragment for fragment in fragments if fragment)


async def extract_price(
    page: Page,
    *,
    selector: str = DEFAULT_PRICE_CONTAINER_SELECTOR,
    fragment_selector: str = DEFAULT_PRICE_FRAGMENT_SELECTOR,
    timeout_ms: int = DEFAULT_SELECTOR_TIMEOUT_MS,
) -> str:
    """
    Wait for the price container and return its joined fragment text.

    Raises SelectorNotFoundError when the container is not attached within
    timeout_ms. A container without fragments yields "" (not an error).
    """
    container = page.locator(selector).first
    try:
        await container.wait_for(state="attached", timeout=timeout_ms)
    except PlaywrightTimeoutError:
        raise SelectorNotFoundError(selector, timeout_ms) from None

    fragments = await container.locator(fragment_selector).all_text_contents()
    price = join_price_fragments(fragments)
    if not price:
        logger.warning("price_empty", selector=selector, fragment_count=len(fragments))
    else:
        logger.info("price_extracted", price=price, fragment_count=len(fragments))
    return price
