"""
Single-target product page scraper.

- `scraper.extract` : the per-page extraction pipeline
- `scraper.crawler` : the crawl engine that loads the page and runs it
- `scraper.main`    : CLI entry point
"""
