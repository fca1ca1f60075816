"""
Product page handler: runs the extraction pipeline for one loaded page.

Order is fixed: classify session, extract price, extract name, screenshot,
assemble, push. Session classification is advisory and never stops the
pipeline. A missing price container ends the page without a record; a
screenshot failure propagates to the crawl engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

from playwright.async_api import Page

from shared.logging import get_logger
from scraper.errors import SelectorNotFoundError
from scraper.extract.name import extract_name
from scraper.extract.price import extract_price
from scraper.extract.record import OutputRecord, assemble_record
from scraper.extract.screenshot import capture_screenshot
from scraper.extract.session_health import (
    SessionHandle,
    apply_session_health,
    classify_session_health,
)

if TYPE_CHECKING:
    from shared.config import ExtractionConfig

logger = get_logger(__name__)

# Async sink for one record; the crawl engine passes the request context's push_data.
PushData = Callable[[dict[str, Any]], Awaitable[Any]]


async def handle_product_page(
    page: Page,
    *,
    start_url: str,
    session: Optional[SessionHandle],
    push_data: PushData,
    config: "ExtractionConfig",
) -> Optional[OutputRecord]:
    """
    Handle one loaded product page.

    Pushes exactly one record and returns it, or pushes nothing and returns
    None when the price container is missing. The record url is start_url,
    not the post-redirect URL.
    """
    title = await page.title()
    logger.info("crawling", title=title, loaded_url=page.url)

    health = classify_session_health(title)
    apply_session_health(session, health)

    try:
        price = await extract_price(
            page,
            selector=config.price_container_selector,
            fragment_selector=config.price_fragment_selector,
            timeout_ms=config.selector_timeout_ms,
        )
    except SelectorNotFoundError as e:
        logger.error(
            "selector_not_found",
            selector=e.selector,
            timeout_ms=e.timeout_ms,
            loaded_url=page.url,
            session_health=health,
        )
        return None

    name = await extract_name(
        page,
        title,
        selector=config.name_selector,
        suffix=config.title_suffix,
        timeout_ms=config.name_timeout_ms,
    )

    screenshot = await capture_screenshot(
        page,
        viewport=config.viewport,
        crop_top_px=config.screenshot_crop_top_px,
        scale=config.screenshot_scale,
    )

    record = assemble_record(url=start_url, name=name, price=price, screenshot=screenshot)
    await push_data(record.to_dict())
    logger.info("record_pushed", name=record.name, price=record.price)
    return record
