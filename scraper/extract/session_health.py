"""
Session health classification from the page title.

The anti-bot layer serves fixed titles for blocked and suspicious sessions.
Classification is a pure string comparison; applying the result to the
session handle is a separate step so the classifier stays side-effect free.
"""

from __future__ import annotations

from typing import Literal, Optional, Protocol

from shared.logging import get_logger
from scraper.extract.constants import BLOCKED_TITLE, SUSPECT_TITLE

logger = get_logger(__name__)

SessionHealth = Literal["healthy", "suspect", "blocked"]


class SessionHandle(Protocol):
    """Browser identity owned by the crawl engine."""

    def retire(self) -> None: ...

    def mark_bad(self) -> None: ...


def classify_session_health(title: str) -> SessionHealth:
    """Map a page title to a health signal (exact match, no normalization)."""
    if title == BLOCKED_TITLE:
        return "blocked"
    if title == SUSPECT_TITLE:
        return "suspect"
    return "healthy"


def apply_session_health(session: Optional[SessionHandle], health: SessionHealth) -> None:
    """
    Report the signal to the session: retire when blocked, mark bad when suspect.

    Healthy needs no call; the crawl engine marks the session good once the
    request succeeds. No-op when the session pool is disabled.
    """
    if session is None:
        return
    if health == "blocked":
        logger.error("session_blocked")
        session.retire()
    elif health == "suspect":
        logger.info("session_suspect")
        session.mark_bad()
