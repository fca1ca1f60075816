"""
Exception hierarchy and user-safe error summaries.

Detailed errors stay in the structured logs; the summaries returned by
get_user_safe_error_summary are short fixed strings with no raw exception
content, suitable for the final per-request log line.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from crawlee.errors import HttpStatusCodeError, SessionError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from shared.config import ConfigError

__all__ = [
    "ConfigError",
    "ScraperError",
    "ScreenshotError",
    "SelectorNotFoundError",
    "get_user_safe_error_summary",
]


class ScraperError(Exception):
    """Base exception for scraper errors raised by the extraction pipeline."""


class SelectorNotFoundError(ScraperError):
    """Raised when a required element does not appear within its timeout."""

    def __init__(self, selector: str, timeout_ms: Optional[int] = None) -> None:
        self.selector = selector
        self.timeout_ms = timeout_ms
        msg = f"Selector not found: {selector}"
        if timeout_ms is not None:
            msg += f" (waited {timeout_ms} ms)"
        super().__init__(msg)


class ScreenshotError(ScraperError):
    """Raised when the reference screenshot cannot be captured."""


def get_user_safe_error_summary(
    exc: BaseException,
    fallback: str = "Crawl failed",
) -> str:
    """
    Return a short, fixed summary for an exception.

    No raw exception messages or stack traces. SessionError covers blocked
    status codes and blocked-page content detected during navigation.
    """
    if isinstance(exc, SelectorNotFoundError):
        return "Price container not found"
    if isinstance(exc, ScreenshotError):
        return "Screenshot failed"
    if isinstance(exc, SessionError):
        return "Blocked"
    if isinstance(exc, HttpStatusCodeError):
        return "Navigation failed"
    if isinstance(exc, PlaywrightTimeoutError):
        return "Navigation timeout"
    if isinstance(exc, asyncio.TimeoutError):
        return "Handler timeout"
    return fallback
