"""
Shajgoj Crawler Package

Site definitions and extractors for shop.shajgoj.com.

Main components:
- SHAJGOJ_SITE: paginated product catalog, fetched directly, written to CSV
- SHAJGOJ_SKIN_SITE: skin category, rendered in a browser, written to JSON
- ShajgojExtractor / ShajgojCategoryExtractor: the page extractors
"""

from listingscraper.scraper import OutputFormat, Site

from .constants import (
    BASE_URL,
    SKIN_CATEGORY_URL,
    MAX_PAGES,
    REQUEST_DELAY,
    REQUEST_TIMEOUT,
    PRODUCT_COLUMNS,
    PRODUCT_HEADERS,
    PRODUCT_OUTPUT_FILE,
    SKIN_COLUMNS,
    SKIN_HEADERS,
    SKIN_OUTPUT_FILE,
    Selectors,
)
from .parser import ShajgojExtractor, ShajgojCategoryExtractor

SHAJGOJ_SITE = Site(
    name="shajgoj",
    base_url=BASE_URL,
    extractor_class=ShajgojExtractor,
    columns=PRODUCT_COLUMNS,
    headers=PRODUCT_HEADERS,
    output_file=PRODUCT_OUTPUT_FILE,
    output_format=OutputFormat.CSV,
    page_ceiling=MAX_PAGES,
    delay=REQUEST_DELAY,
    timeout=REQUEST_TIMEOUT,
)

SHAJGOJ_SKIN_SITE = Site(
    name="shajgoj-skin",
    base_url=SKIN_CATEGORY_URL,
    extractor_class=ShajgojCategoryExtractor,
    columns=SKIN_COLUMNS,
    headers=SKIN_HEADERS,
    output_file=SKIN_OUTPUT_FILE,
    output_format=OutputFormat.JSON,
    rendered=True,
    wait_selector=Selectors.CATEGORY_ITEM,
    page_ceiling=MAX_PAGES,
    delay=REQUEST_DELAY,
)

# Define public API
__all__ = [
    "SHAJGOJ_SITE",
    "SHAJGOJ_SKIN_SITE",
    "ShajgojExtractor",
    "ShajgojCategoryExtractor",
    "Selectors",
    "BASE_URL",
    "SKIN_CATEGORY_URL",
]
