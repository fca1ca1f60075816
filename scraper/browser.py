"""
Browser launch and context options (viewport, UA, timezone) for the crawler's browser pool.
"""

from __future__ import annotations

from typing import Any, Mapping

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


def browser_launch_options(timeout_ms: int) -> dict[str, Any]:
    """Chromium launch options; the launch itself is bounded by timeout_ms."""
    return {"timeout": timeout_ms}


def browser_context_options(viewport: Mapping[str, int]) -> dict[str, Any]:
    """
    Options for every new browser context.

    Uses stable UA, viewport, and timezone for anti-bot considerations.
    Session cookies are applied by the crawler, not here.
    """
    return {
        "viewport": {"width": viewport["width"], "height": viewport["height"]},
        "user_agent": USER_AGENT,
        "timezone_id": "America/New_York",
        "locale": "en-US",
    }
