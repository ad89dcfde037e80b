"""
Constants and configuration settings for the Shajgoj crawlers.

This module contains base URLs, HTML selectors, output schema and fetch
limits for scraping shop.shajgoj.com.
"""

# Base URLs
BASE_URL = "https://shop.shajgoj.com"
SKIN_CATEGORY_URL = f"{BASE_URL}/product-category/skin/"

# HTML Selectors
class Selectors:
    # Catalog page selectors
    PRODUCT_LIST = "div.container.mx-auto ul"
    PRODUCT_ITEM = ":scope > li"
    PRODUCT_NAME = "div > a p.text-gray-700"
    PRODUCT_PRICE = "div > a div.flex.justify-start.space-x-3"
    PRODUCT_LINK = "div > a"

    # Category page selectors (rendered)
    CATEGORY_ITEM = "div.container.mx-auto ul li"
    CATEGORY_TITLE = "p.text-gray-700.text-sm"
    CATEGORY_PRICE = "span.text-sg-pink.font-semibold, span.just-price"
    CATEGORY_LINK = "a"

    # Pagination
    NEXT_PAGE = "a.next.page-numbers"

# Crawl limits
MAX_PAGES = 10  # Safety limit
REQUEST_DELAY = 3.0  # Seconds between pages
REQUEST_TIMEOUT = 10  # Seconds

# Output schema
PRODUCT_COLUMNS = ("name", "price", "url", "page")
PRODUCT_HEADERS = {
    "name": "Product Name",
    "price": "Price",
    "url": "Product URL",
    "page": "Page Number",
}
PRODUCT_OUTPUT_FILE = "shajgoj_products.csv"

SKIN_COLUMNS = ("title", "price", "url")
SKIN_HEADERS = {"url": "productUrl"}
SKIN_OUTPUT_FILE = "shajgoj_skin_products.json"

# Placeholders used when a category card lacks a field
NO_TITLE = "No title found"
NO_PRICE = "Price not available"
