"""
Command-line entry point for crawl runs.

Resolves a registered site, builds its fetch policy from settings and
command-line overrides, runs the pagination driver inside the fetcher's
session and persists whatever was collected.

Usage:
    listingscraper-crawl shajgoj --max-pages 3 --output products.csv
    listingscraper-crawl shajgoj-skin --format json --log-level DEBUG
"""

import argparse
import asyncio
import logging
import os
import signal
import sys
from typing import List, Optional

from listingscraper.core.config import settings
from listingscraper.scraper import (
    BaseFetcher, ExclusionRuleSet, FetchPolicy, HttpFetcher, NetworkError,
    OutputFormat, PaginationDriver, PersistenceError, PolicyGuard,
    RenderedFetcher, RunResult, ScraperError, Site, create_sink,
    load_exclusion_rules,
)

from crawlers.registry import get_site, site_names

# Configure logger
logger = logging.getLogger(__name__)

ROBOTS_SITE = "site"
ROBOTS_FETCH = "fetch"
ROBOTS_NONE = "none"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Crawl a paginated listing and save the extracted records")
    parser.add_argument("site", choices=site_names(), help="Site to crawl")
    parser.add_argument("--max-pages", type=int, help="Page ceiling for the run")
    parser.add_argument("--delay", type=float, help="Seconds to wait between pages")
    parser.add_argument("--max-retries", type=int, help="Retries per page after the first attempt")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds, also bounds rendered navigation")
    parser.add_argument("--output", help="Output file path")
    parser.add_argument("--format", choices=[f.value for f in OutputFormat], help="Output format")
    parser.add_argument(
        "--robots",
        choices=[ROBOTS_SITE, ROBOTS_FETCH, ROBOTS_NONE],
        default=ROBOTS_SITE,
        help="Exclusion rules: the site's built-in list, the live robots.txt, or none",
    )
    parser.add_argument("--rendered", action="store_true", help="Force browser rendering")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level")
    return parser.parse_args(argv)


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def resolve_exclusion_rules(site: Site, mode: str, timeout: float) -> ExclusionRuleSet:
    """
    Pick the exclusion rules for a run.

    A robots.txt that cannot be fetched falls back to the site's built-in list.
    """
    if mode == ROBOTS_NONE:
        return ExclusionRuleSet()
    if mode == ROBOTS_FETCH:
        try:
            return await load_exclusion_rules(site.base_url, timeout=timeout)
        except NetworkError as e:
            logger.warning(f"Using built-in exclusion rules for {site.name}: {e}")
    return site.exclusion_rules()


def create_fetcher(
    site: Site,
    policy: FetchPolicy,
    rendered: bool = False,
    navigation_timeout: Optional[float] = None,
) -> BaseFetcher:
    """
    Return the fetcher a site needs.

    Rendered navigation waits for ``navigation_timeout``, else the site's own
    timeout, else SCRAPER_RENDER_TIMEOUT.
    """
    if rendered or site.rendered:
        return RenderedFetcher(
            wait_selector=site.wait_selector,
            navigation_timeout=navigation_timeout or site.timeout or settings.SCRAPER_RENDER_TIMEOUT,
            wait_timeout=settings.SCRAPER_WAIT_SELECTOR_TIMEOUT,
            headless=settings.SCRAPER_HEADLESS,
            user_agent=settings.SCRAPER_USER_AGENT,
            accept_language=settings.SCRAPER_ACCEPT_LANGUAGE,
        )
    return HttpFetcher(
        timeout=policy.timeout,
        user_agent=settings.SCRAPER_USER_AGENT,
        accept_language=settings.SCRAPER_ACCEPT_LANGUAGE,
    )


def _install_stop_handlers(stop_event: asyncio.Event):
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            logger.debug(f"Signal handler for {sig.name} not supported on this platform")


async def crawl(
    site: Site,
    policy: FetchPolicy,
    output: str,
    output_format: OutputFormat,
    robots_mode: str = ROBOTS_SITE,
    rendered: bool = False,
    fetcher: Optional[BaseFetcher] = None,
    navigation_timeout: Optional[float] = None,
) -> RunResult:
    """
    Run one crawl and persist its records.

    Records gathered before a retry exhaustion are still written.

    Raises:
        PersistenceError: If the output cannot be written
    """
    rules = await resolve_exclusion_rules(site, robots_mode, policy.timeout)
    logger.info(f"Crawling {site.name} with {len(rules)} exclusion rules")

    stop_event = asyncio.Event()
    _install_stop_handlers(stop_event)

    fetcher = fetcher or create_fetcher(site, policy, rendered, navigation_timeout)
    async with fetcher:
        driver = PaginationDriver(
            policy,
            fetcher,
            site.create_extractor(),
            guard=PolicyGuard(rules),
            stop_event=stop_event,
        )
        result = await driver.run()

    if result.aborted:
        logger.warning(f"Run aborted, saving {len(result.records)} records collected so far")

    sink = create_sink(output_format, site.columns, site.headers)
    sink.persist(result.records, output)
    return result


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    site = get_site(args.site)
    overrides = site.policy_overrides()
    cli_overrides = {
        "page_ceiling": args.max_pages,
        "delay": args.delay,
        "max_retries": args.max_retries,
        "timeout": args.timeout,
    }
    overrides.update({k: v for k, v in cli_overrides.items() if v is not None})
    policy = settings.fetch_policy(site.base_url, **overrides)
    output_format = OutputFormat(args.format) if args.format else site.output_format
    output = args.output or os.path.join(settings.SCRAPER_OUTPUT_DIR, site.output_file)

    try:
        result = asyncio.run(
            crawl(site, policy, output, output_format, args.robots, args.rendered, navigation_timeout=args.timeout)
        )
    except PersistenceError as e:
        logger.error(f"Could not save results: {e}")
        return 1
    except ScraperError as e:
        logger.error(f"Crawl failed: {e}")
        return 1

    logger.info(f"Saved {len(result.records)} records to {output} ({result.status.value})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
