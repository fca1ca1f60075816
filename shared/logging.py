"""
Structured logging setup for the product page scraper.

All runtime logging goes through structlog. Logs are rendered as JSON with
an ISO timestamp and level, and per-request context (url, session id,
attempt) is carried through contextvars so that every stage of the
extraction pipeline logs it without threading it through call sites.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Optional

import structlog


def _build_shared_processors() -> list[structlog.types.Processor]:
    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)

    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        timestamper,
        structlog.processors.EventRenamer("message"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def _plain_handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_stdout: bool = True,
) -> None:
    """
    Configure structlog and the standard logging module.

    Call once at process startup. Repeated calls replace the root handlers.

    - When log_stdout is True (default), a StreamHandler(sys.stdout) is added.
    - When log_file is set, a FileHandler is added (parent dir created if needed).
    - If neither applies, stdout is used so the process never has zero handlers.
    """

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    if log_stdout:
        root.addHandler(_plain_handler(logging.StreamHandler(sys.stdout), level))

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        root.addHandler(_plain_handler(logging.FileHandler(log_file, encoding="utf-8"), level))

    if not root.handlers:
        root.addHandler(_plain_handler(logging.StreamHandler(sys.stdout), level))

    structlog.configure(
        processors=_build_shared_processors(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Obtain a structured logger.

    Usage:
        from shared.logging import get_logger, bind_request_context

        logger = get_logger(__name__)
        bind_request_context(url="https://...", attempt=1)
        logger.info("price_extracted", price="$19.99")
    """

    # Not configured yet: fall back to the default setup instead of
    # dropping logs silently.
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(name) if name else structlog.get_logger()


def bind_request_context(
    *,
    url: Optional[str] = None,
    session_id: Optional[str] = None,
    attempt: Optional[int] = None,
    **extra: Any,
) -> Mapping[str, Any]:
    """
    Bind common context fields for per-request crawl logging.

    Fields left as None are not bound. Additional keyword arguments are
    bound as-is.
    """

    context: dict[str, Any] = {
        "url": url,
        "session_id": session_id,
        "attempt": attempt,
        **extra,
    }
    filtered_context = {k: v for k, v in context.items() if v is not None}

    structlog.contextvars.bind_contextvars(**filtered_context)
    return filtered_context
