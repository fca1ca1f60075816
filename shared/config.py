"""
Environment-based configuration for the product page scraper.

This module exposes a small, typed configuration surface shared by the
crawl engine and the extraction pipeline. All values are sourced from
environment variables with non-secret defaults and validated once, at
construction time.

No secrets or credentials are hard-coded here; they must be provided via
the environment (or tooling such as python-dotenv in local development).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


class ConfigError(ValueError):
    """Raised when configuration from the environment is invalid."""


# Extraction defaults. The product page layout and brand suffix are the
# parts most likely to drift, so each one can be overridden from the env.
DEFAULT_PRICE_CONTAINER_SELECTOR = "#standard-price > div > div"
DEFAULT_PRICE_FRAGMENT_SELECTOR = "span"
DEFAULT_NAME_SELECTOR = "div.product-details__title h1"
DEFAULT_TITLE_SUFFIX = " - The Home Depot"
DEFAULT_SELECTOR_TIMEOUT_MS = 10_000  # price container wait
DEFAULT_NAME_TIMEOUT_MS = 3_000  # structured name lookup; short, it has a fallback
DEFAULT_VIEWPORT_WIDTH = 1280
DEFAULT_VIEWPORT_HEIGHT = 720
DEFAULT_SCREENSHOT_CROP_TOP_PX = 180  # site header banner
DEFAULT_SCREENSHOT_SCALE = 1.0


def _bool_env(name: str, default: bool) -> bool:
    raw = (os.getenv(name) or str(default)).strip().lower()
    return raw in ("true", "1", "yes")


def _int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def _float_env(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def _str_env(name: str, default: str) -> str:
    # Empty values fall back to the default; selectors and suffixes are never blank.
    return os.getenv(name) or default


@dataclass(frozen=True)
class CrawlerConfig:
    """
    Settings for the crawl engine around the extraction pipeline.

    These are pass-through knobs (retries, caps, timeouts, session pool)
    and carry no extraction logic of their own.
    """

    max_request_retries: int = 0
    max_requests_per_crawl: int = 1
    navigation_timeout_secs: int = 25
    request_handler_timeout_secs: int = 30
    use_session_pool: bool = True
    max_pool_size: int = 100
    max_session_rotations: int = 10
    persist_cookies_per_session: bool = True
    max_concurrency: int = 1
    headless: bool = True
    launch_timeout_ms: int = 5000

    def __post_init__(self) -> None:
        if self.max_request_retries < 0:
            raise ConfigError("MAX_REQUEST_RETRIES must be >= 0")
        if self.max_session_rotations < 0:
            raise ConfigError("MAX_SESSION_ROTATIONS must be >= 0")
        for field_name in (
            "max_requests_per_crawl",
            "navigation_timeout_secs",
            "request_handler_timeout_secs",
            "max_pool_size",
            "max_concurrency",
            "launch_timeout_ms",
        ):
            if getattr(self, field_name) <= 0:
                raise ConfigError(f"{field_name.upper()} must be > 0")

    @classmethod
    def from_env(cls) -> "CrawlerConfig":
        return cls(
            max_request_retries=_int_env("MAX_REQUEST_RETRIES", 0),
            max_requests_per_crawl=_int_env("MAX_REQUESTS_PER_CRAWL", 1),
            navigation_timeout_secs=_int_env("NAVIGATION_TIMEOUT_SECS", 25),
            request_handler_timeout_secs=_int_env("REQUEST_HANDLER_TIMEOUT_SECS", 30),
            use_session_pool=_bool_env("USE_SESSION_POOL", True),
            max_pool_size=_int_env("MAX_POOL_SIZE", 100),
            max_session_rotations=_int_env("MAX_SESSION_ROTATIONS", 10),
            persist_cookies_per_session=_bool_env("PERSIST_COOKIES_PER_SESSION", True),
            max_concurrency=_int_env("MAX_CONCURRENCY", 1),
            headless=_bool_env("HEADLESS", True),
            launch_timeout_ms=_int_env("LAUNCH_TIMEOUT_MS", 5000),
        )


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Selectors, timeouts and screenshot geometry for one product page.

    The title suffix is site branding and is the part most likely to drift;
    it is configuration, not code.
    """

    price_container_selector: str = DEFAULT_PRICE_CONTAINER_SELECTOR
    price_fragment_selector: str = DEFAULT_PRICE_FRAGMENT_SELECTOR
    name_selector: str = DEFAULT_NAME_SELECTOR
    title_suffix: str = DEFAULT_TITLE_SUFFIX
    selector_timeout_ms: int = DEFAULT_SELECTOR_TIMEOUT_MS
    name_timeout_ms: int = DEFAULT_NAME_TIMEOUT_MS
    viewport_width: int = DEFAULT_VIEWPORT_WIDTH
    viewport_height: int = DEFAULT_VIEWPORT_HEIGHT
    screenshot_crop_top_px: int = DEFAULT_SCREENSHOT_CROP_TOP_PX
    screenshot_scale: float = DEFAULT_SCREENSHOT_SCALE

    def __post_init__(self) -> None:
        if self.selector_timeout_ms <= 0 or self.name_timeout_ms <= 0:
            raise ConfigError("selector timeouts must be > 0")
        if self.viewport_width <= 0 or self.viewport_height <= 0:
            raise ConfigError("viewport dimensions must be > 0")
        if not 0 <= self.screenshot_crop_top_px < self.viewport_height:
            raise ConfigError(
                f"SCREENSHOT_CROP_TOP_PX must be in [0, {self.viewport_height}), "
                f"got {self.screenshot_crop_top_px}"
            )
        if not 0 < self.screenshot_scale <= 1:
            raise ConfigError(
                f"SCREENSHOT_SCALE must be in (0, 1], got {self.screenshot_scale}"
            )

    @property
    def viewport(self) -> dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}

    @classmethod
    def from_env(cls) -> "ExtractionConfig":
        return cls(
            price_container_selector=_str_env(
                "PRICE_CONTAINER_SELECTOR", DEFAULT_PRICE_CONTAINER_SELECTOR
            ),
            price_fragment_selector=_str_env(
                "PRICE_FRAGMENT_SELECTOR", DEFAULT_PRICE_FRAGMENT_SELECTOR
            ),
            name_selector=_str_env("NAME_SELECTOR", DEFAULT_NAME_SELECTOR),
            # Suffix keeps its leading space, so it is read raw.
            title_suffix=os.getenv("TITLE_SUFFIX", DEFAULT_TITLE_SUFFIX),
            selector_timeout_ms=_int_env("SELECTOR_TIMEOUT_MS", DEFAULT_SELECTOR_TIMEOUT_MS),
            name_timeout_ms=_int_env("NAME_TIMEOUT_MS", DEFAULT_NAME_TIMEOUT_MS),
            viewport_width=_int_env("VIEWPORT_WIDTH", DEFAULT_VIEWPORT_WIDTH),
            viewport_height=_int_env("VIEWPORT_HEIGHT", DEFAULT_VIEWPORT_HEIGHT),
            screenshot_crop_top_px=_int_env(
                "SCREENSHOT_CROP_TOP_PX", DEFAULT_SCREENSHOT_CROP_TOP_PX
            ),
            screenshot_scale=_float_env("SCREENSHOT_SCALE", DEFAULT_SCREENSHOT_SCALE),
        )


@dataclass(frozen=True)
class AppConfig:
    """
    Top-level application configuration.

    Groups the cross-cutting settings (logging, storage location) with the
    crawl engine and extraction settings so that a single object can be
    built at startup and passed down explicitly.
    """

    log_level: str

    # Optional file path for structured JSON logs; when set, logs are written
    # to file (and stdout if log_stdout).
    log_file: Optional[str]
    # When True, logs go to stdout. When False, only file (if LOG_FILE set). Default True.
    log_stdout: bool

    # Root for the input key-value store and the output dataset.
    storage_dir: str

    crawler: CrawlerConfig
    extraction: ExtractionConfig

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Construct configuration from environment variables.

        All fields have defaults suitable for a single local run. Invalid
        values raise ConfigError instead of being silently replaced.
        """

        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE") or None,
            log_stdout=_bool_env("LOG_STDOUT", True),
            storage_dir=os.getenv("STORAGE_DIR", "./storage"),
            crawler=CrawlerConfig.from_env(),
            extraction=ExtractionConfig.from_env(),
        )


def get_config() -> AppConfig:
    """
    Helper to obtain the current configuration.

    In simple scripts, calling this function directly is sufficient. In
    longer-lived processes, construct a single `AppConfig` instance at
    startup and pass it explicitly through your code.
    """

    return AppConfig.from_env()
