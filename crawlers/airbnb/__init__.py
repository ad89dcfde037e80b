"""
Airbnb Crawler Package

Site definition and extractor for Airbnb search results. Pages are rendered
in a browser and checked against the site's robots.txt disallow list.
"""

from listingscraper.scraper import OutputFormat, Site

from .constants import (
    BASE_URL,
    SEARCH_URL,
    MAX_PAGES,
    REQUEST_DELAY,
    LISTING_COLUMNS,
    LISTING_OUTPUT_FILE,
    DISALLOWED_PATHS,
    Selectors,
)
from .parser import AirbnbListingExtractor, extract_room_id

AIRBNB_SITE = Site(
    name="airbnb",
    base_url=SEARCH_URL,
    extractor_class=AirbnbListingExtractor,
    columns=LISTING_COLUMNS,
    output_file=LISTING_OUTPUT_FILE,
    output_format=OutputFormat.JSON,
    rendered=True,
    wait_selector=Selectors.RESULTS_READY,
    page_ceiling=MAX_PAGES,
    delay=REQUEST_DELAY,
    exclusion_patterns=DISALLOWED_PATHS,
)

# Define public API
__all__ = [
    "AIRBNB_SITE",
    "AirbnbListingExtractor",
    "extract_room_id",
    "Selectors",
    "BASE_URL",
    "SEARCH_URL",
    "DISALLOWED_PATHS",
]
