"""
Shared utilities for the product page scraper.

This package is intentionally small. It provides:

- `shared.config` for environment-based configuration
- `shared.logging` for structlog-based structured logging

The crawl engine and the extraction pipeline both treat `shared/` as
read-only infrastructure code.
"""
