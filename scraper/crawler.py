"""
Crawl engine: a crawlee PlaywrightCrawler wired to the product page handler.

crawlee owns the browser pool, the request queue, retries, the session
pool, handler and navigation timeouts, concurrency and the default dataset.
This module maps CrawlerConfig onto crawler options and registers the
default handler plus the retry/failure log hooks.

Records pushed through context.push_data are buffered by crawlee and
committed only after the whole request handler succeeds, so a request that
fails after extraction and is retried never leaves a duplicate record.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any

from crawlee import ConcurrencySettings
from crawlee.crawlers import (
    BasicCrawlingContext,
    PlaywrightCrawler,
    PlaywrightCrawlingContext,
    PlaywrightPreNavCrawlingContext,
)
from crawlee.sessions import SessionPool
from crawlee.statistics import FinalStatistics

from shared.logging import bind_request_context, get_logger
from scraper.browser import browser_context_options, browser_launch_options
from scraper.errors import get_user_safe_error_summary
from scraper.extract import handle_product_page
from scraper.inspector import open_inspector

if TYPE_CHECKING:
    from shared.config import CrawlerConfig, ExtractionConfig

logger = get_logger(__name__)

# An Inspector pause waits on a human; the handler timeout must not cut it off.
INSPECT_HANDLER_TIMEOUT = timedelta(hours=1)


def crawler_options(
    crawler_config: "CrawlerConfig",
    extraction_config: "ExtractionConfig",
    *,
    inspect: bool = False,
) -> dict[str, Any]:
    """Keyword arguments for PlaywrightCrawler built from the config."""
    handler_timeout = (
        INSPECT_HANDLER_TIMEOUT
        if inspect
        else timedelta(seconds=crawler_config.request_handler_timeout_secs)
    )
    options: dict[str, Any] = {
        "browser_type": "chromium",
        "headless": crawler_config.headless,
        "browser_launch_options": browser_launch_options(crawler_config.launch_timeout_ms),
        "browser_new_context_options": browser_context_options(extraction_config.viewport),
        # Generated fingerprints would override the fixed UA and viewport.
        "fingerprint_generator": None,
        "goto_options": {"wait_until": "domcontentloaded"},
        "navigation_timeout": timedelta(seconds=crawler_config.navigation_timeout_secs),
        "request_handler_timeout": handler_timeout,
        "max_request_retries": crawler_config.max_request_retries,
        "max_requests_per_crawl": crawler_config.max_requests_per_crawl,
        "max_session_rotations": crawler_config.max_session_rotations,
        "use_session_pool": crawler_config.use_session_pool,
        "concurrency_settings": ConcurrencySettings(
            max_concurrency=crawler_config.max_concurrency,
            desired_concurrency=1,
        ),
        # Logging goes through shared.logging.
        "configure_logging": False,
    }
    if crawler_config.use_session_pool:
        options["session_pool"] = SessionPool(max_pool_size=crawler_config.max_pool_size)
    return options


async def prepare_request(
    context: PlaywrightPreNavCrawlingContext,
    *,
    persist_cookies: bool = True,
) -> None:
    """
    Pre-navigation hook: bind log context for this attempt.

    When cookies are not persisted per session, the session's saved cookies
    are dropped before crawlee applies them to the page.
    """
    session = context.session
    bind_request_context(
        url=context.request.url,
        attempt=context.request.retry_count + 1,
        session_id=session.id if session is not None else None,
    )
    if session is not None and not persist_cookies:
        session.cookies.jar.clear()


async def handle_request(
    context: PlaywrightCrawlingContext,
    *,
    config: "ExtractionConfig",
    inspect: bool = False,
) -> None:
    """Default request handler: run the product page pipeline on the loaded page."""
    record = await handle_product_page(
        context.page,
        start_url=context.request.url,
        session=context.session,
        push_data=context.push_data,
        config=config,
    )
    if inspect:
        await open_inspector(context.page)
    logger.info("request_handled", record_pushed=record is not None)


async def log_request_retry(context: BasicCrawlingContext, error: Exception) -> None:
    """Error hook: called before crawlee retries the request."""
    logger.warning(
        "request_retry",
        url=context.request.url,
        attempt=context.request.retry_count + 1,
        reason=get_user_safe_error_summary(error),
        error=str(error),
        error_type=type(error).__name__,
    )


async def log_request_failed(context: BasicCrawlingContext, error: Exception) -> None:
    """Failed-request hook: retries are exhausted and no record was committed."""
    logger.error(
        "request_failed",
        url=context.request.url,
        error_summary=get_user_safe_error_summary(error),
        error=str(error),
        error_type=type(error).__name__,
        retry_count=context.request.retry_count,
    )


def build_crawler(
    crawler_config: "CrawlerConfig",
    extraction_config: "ExtractionConfig",
    *,
    inspect: bool = False,
) -> PlaywrightCrawler:
    """Create the crawler and register the hooks and the default handler."""
    crawler = PlaywrightCrawler(
        **crawler_options(crawler_config, extraction_config, inspect=inspect)
    )

    async def before_navigation(context: PlaywrightPreNavCrawlingContext) -> None:
        await prepare_request(
            context, persist_cookies=crawler_config.persist_cookies_per_session
        )

    async def default_handler(context: PlaywrightCrawlingContext) -> None:
        await handle_request(context, config=extraction_config, inspect=inspect)

    crawler.pre_navigation_hook(before_navigation)
    crawler.router.default_handler(default_handler)
    crawler.error_handler(log_request_retry)
    crawler.failed_request_handler(log_request_failed)
    return crawler


async def run_crawl(
    start_url: str,
    *,
    crawler_config: "CrawlerConfig",
    extraction_config: "ExtractionConfig",
    inspect: bool = False,
) -> FinalStatistics:
    """
    Crawl the start URL and push at most one record to the default dataset.

    Must run inside an active Actor so the crawler shares its storage.
    """
    crawler = build_crawler(crawler_config, extraction_config, inspect=inspect)

    logger.info(
        "crawl_started",
        start_url=start_url,
        max_request_retries=crawler_config.max_request_retries,
        use_session_pool=crawler_config.use_session_pool,
        headless=crawler_config.headless,
    )

    stats = await crawler.run([start_url])

    logger.info(
        "crawl_finished",
        requests_total=stats.requests_total,
        requests_finished=stats.requests_finished,
        requests_failed=stats.requests_failed,
        retry_histogram=stats.retry_histogram,
    )
    return stats
