"""
Shared fixtures for scraper tests: mocked Playwright pages and a tiny PNG.

No browser or network is needed; every Playwright call the pipeline makes
is an AsyncMock on a MagicMock page.
"""

from __future__ import annotations

import io
from typing import Callable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from PIL import Image
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from scraper.extract.constants import (
    DEFAULT_NAME_SELECTOR,
    DEFAULT_PRICE_CONTAINER_SELECTOR,
)


def make_png(width: int = 40, height: int = 20) -> bytes:
    img = Image.new("RGB", (width, height), color=(200, 30, 30))
    out = io.BytesIO()
    img.save(out, format="PNG")
    return out.getvalue()


def price_locator(fragments: Optional[list[str]]) -> MagicMock:
    """Locator for the price container; fragments=None means it never appears."""
    container = MagicMock()
    if fragments is None:
        container.wait_for = AsyncMock(side_effect=PlaywrightTimeoutError("Timeout 10000ms exceeded"))
    else:
        container.wait_for = AsyncMock(return_value=None)
    spans = MagicMock()
    spans.all_text_contents = AsyncMock(return_value=fragments or [])
    container.locator = MagicMock(return_value=spans)
    locator = MagicMock()
    locator.first = container
    return locator


def name_locator(text: Optional[str]) -> MagicMock:
    """Locator for the structured name; text=None means the lookup times out."""
    element = MagicMock()
    if text is None:
        element.text_content = AsyncMock(side_effect=PlaywrightTimeoutError("Timeout 3000ms exceeded"))
    else:
        element.text_content = AsyncMock(return_value=text)
    locator = MagicMock()
    locator.first = element
    return locator


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def make_page(png_bytes) -> Callable[..., MagicMock]:
    """
    Build a mocked product page.

    price_fragments=None: price container missing.
    name_text=None: structured name element missing.
    screenshot_error: exception raised by page.screenshot.
    """

    def _make(
        *,
        title: str = "Widget X - The Home Depot",
        url: str = "https://example.com/p/123",
        price_fragments: Optional[list[str]] = None,
        name_text: Optional[str] = None,
        screenshot_error: Optional[BaseException] = None,
    ) -> MagicMock:
        locators = {
            DEFAULT_PRICE_CONTAINER_SELECTOR: price_locator(price_fragments),
            DEFAULT_NAME_SELECTOR: name_locator(name_text),
        }
        page = MagicMock()
        page.url = url
        page.title = AsyncMock(return_value=title)
        page.locator = MagicMock(side_effect=lambda selector: locators[selector])
        if screenshot_error is not None:
            page.screenshot = AsyncMock(side_effect=screenshot_error)
        else:
            page.screenshot = AsyncMock(return_value=png_bytes)
        return page

    return _make
