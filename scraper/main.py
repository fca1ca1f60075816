"""
CLI entry point: scrape one product page into the default dataset.

Usage: python -m scraper.main [--url <product_url>] [--no-headless] [--inspect]

Without --url the start URL is read from the Actor input
(storage/key_value_stores/default/INPUT.json, key "startUrl").
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from typing import Any, Optional, Sequence

from apify import Actor, Configuration
from dotenv import load_dotenv

from shared.config import AppConfig, ConfigError
from shared.logging import configure_logging, get_logger
from scraper.crawler import run_crawl

logger = get_logger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scrape price and name from one product page")
    parser.add_argument("--url", help="Product page URL (overrides INPUT.json startUrl)")
    parser.add_argument(
        "--no-headless",
        action="store_true",
        help="Show browser window. Use for local debugging.",
    )
    parser.add_argument(
        "--inspect",
        action="store_true",
        help="Pause in the Playwright Inspector after the page is handled (implies --no-headless).",
    )
    return parser.parse_args(argv)


def start_url_from_input(actor_input: Any) -> Optional[str]:
    """
    Read the start URL from the Actor input record.

    Accepts "startUrl" and the shorter "url" alias. Raises ValueError when
    the record is not a JSON object or the URL is not a string.
    """
    if actor_input is None:
        return None
    if not isinstance(actor_input, dict):
        raise ValueError(f"input must be a JSON object, got {type(actor_input).__name__}")
    start_url = actor_input.get("startUrl") or actor_input.get("url")
    if start_url is None:
        return None
    if not isinstance(start_url, str):
        raise ValueError("startUrl must be a string")
    return start_url.strip() or None


async def _run(args: argparse.Namespace, config: AppConfig) -> int:
    crawler_config = config.crawler
    if args.no_headless or args.inspect:
        crawler_config = dataclasses.replace(crawler_config, headless=False)

    actor_config = Configuration(storage_dir=config.storage_dir)
    async with Actor(configuration=actor_config, configure_logging=False, exit_process=False) as actor:
        start_url = args.url
        if not start_url:
            try:
                start_url = start_url_from_input(await actor.get_input())
            except ValueError as e:
                logger.error("input_invalid", storage_dir=config.storage_dir, error=str(e))
                print(f"ERROR: invalid INPUT.json: {e}", file=sys.stderr)
                return 2

        if not start_url:
            logger.error("start_url_missing", storage_dir=config.storage_dir)
            print("ERROR: no start URL given (use --url or INPUT.json startUrl).", file=sys.stderr)
            return 2

        stats = await run_crawl(
            start_url,
            crawler_config=crawler_config,
            extraction_config=config.extraction,
            inspect=args.inspect,
        )
    return 0 if stats.requests_failed == 0 else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one crawl; returns the process exit code."""
    load_dotenv()
    args = _parse_args(argv)

    try:
        config = AppConfig.from_env()
    except ConfigError as e:
        print(f"ERROR: invalid configuration: {e}", file=sys.stderr)
        return 2

    configure_logging(
        level=logging.getLevelName(config.log_level.upper()),
        log_file=config.log_file,
        log_stdout=config.log_stdout,
    )
    return asyncio.run(_run(args, config))


if __name__ == "__main__":
    sys.exit(main())
