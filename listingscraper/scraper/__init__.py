"""
Crawl Loop Package

This package provides the reusable pieces of a paginated, polite crawl:

Main components:
- PolicyGuard / ExclusionRuleSet: robots-style path exclusion
- HttpFetcher / RenderedFetcher: direct and browser-rendered retrieval
- BaseExtractor: contract for site-specific extraction
- PaginationDriver: the page loop with retries, delay and de-duplication
- CsvSink / JsonSink: atomic persistence of the results

Usage:
    from listingscraper.scraper import HttpFetcher, PaginationDriver, FetchPolicy, CsvSink

    policy = FetchPolicy(base_url="https://shop.example.com")
    async with HttpFetcher(timeout=policy.timeout) as fetcher:
        result = await PaginationDriver(policy, fetcher, MyExtractor(policy.base_url)).run()
    CsvSink(["name", "price", "url", "page"]).persist(result.records, "products.csv")
"""

from .constants import DriverState, OutputFormat, RunStatus, StopReason
from .errors import (
    ScraperError,
    NetworkError,
    RenderTimeoutError,
    ExtractionSkip,
    PersistenceError,
)
from .models import Record, PageResult, FetchPolicy, RunState, RunResult
from .robots import ExclusionRuleSet, PolicyGuard, load_exclusion_rules
from .fetcher import BaseFetcher, HttpFetcher, RenderedFetcher
from .extractor import BaseExtractor, clean_text, clean_price
from .driver import PaginationDriver
from .sink import BaseSink, CsvSink, JsonSink, create_sink
from .site import Site

# Define public API
__all__ = [
    "DriverState",
    "OutputFormat",
    "RunStatus",
    "StopReason",
    "ScraperError",
    "NetworkError",
    "RenderTimeoutError",
    "ExtractionSkip",
    "PersistenceError",
    "Record",
    "PageResult",
    "FetchPolicy",
    "RunState",
    "RunResult",
    "ExclusionRuleSet",
    "PolicyGuard",
    "load_exclusion_rules",
    "BaseFetcher",
    "HttpFetcher",
    "RenderedFetcher",
    "BaseExtractor",
    "clean_text",
    "clean_price",
    "PaginationDriver",
    "BaseSink",
    "CsvSink",
    "JsonSink",
    "create_sink",
    "Site",
]
