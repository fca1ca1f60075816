"""
Interactive debugging: pause on the live page in the Playwright Inspector.

Only useful in headed mode; the CLI forces headless off when --inspect is set.
"""

from __future__ import annotations

from playwright.async_api import Page

from shared.logging import get_logger

logger = get_logger(__name__)


async def open_inspector(page: Page) -> None:
    """Block until the developer resumes from the Inspector."""
    logger.info("inspector_opened", loaded_url=page.url)
    await page.pause()
    logger.info("inspector_resumed")
