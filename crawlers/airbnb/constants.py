"""
Constants and configuration settings for the Airbnb crawler.

This module contains base URLs, HTML selectors, the robots.txt disallow
list and the output schema for scraping Airbnb search results.
"""

# Base URLs
BASE_URL = "https://www.airbnb.com"
SEARCH_URL = f"{BASE_URL}/s/homes"
ROOM_URL = f"{BASE_URL}/rooms/"

# HTML Selectors
class Selectors:
    LISTING = (
        '[itemprop="itemListElement"], [data-testid*="listing"], [data-testid*="card"], '
        '[class*="listing"], [class*="room-card"]'
    )
    LISTING_TITLE = 'h2, h3, [class*="title"]'
    LISTING_PRICE = '[class*="price"]'
    LISTING_RATING = '[class*="rating"], [class*="star"]'
    LISTING_LOCATION = '[class*="location"], [class*="address"]'
    LISTING_IMAGE = "img"
    LISTING_LINK = 'a[href*="/rooms/"]'
    NEXT_PAGE = 'a[aria-label="Next"]'
    # Rendered pages are read once this marker exists
    RESULTS_READY = '[itemprop="itemListElement"]'

# Pagination
ITEMS_PER_PAGE = 18
OFFSET_PARAM = "items_offset"

# Crawl limits
# Result pages after the first (items_offset) match the "/s/*?" disallow rule
MAX_PAGES = 1
REQUEST_DELAY = 2.0  # Seconds

# Output schema
LISTING_COLUMNS = ("id", "title", "price", "rating", "location", "image_url", "url", "page")
LISTING_OUTPUT_FILE = "airbnb_listings.json"

# Disallowed paths from airbnb.com/robots.txt
DISALLOWED_PATHS = (
    "/*/skeleton", "/*/sw_skeleton", "/500", "/account", "/alumni",
    "/api/v1/trebuchet", "/associates/click", "/book/", "/calendar/",
    "/contact_host", "/disaster/lookup", "/email/unsubscribe", "/embeddable",
    "/experiences/*?*scheduled_id", "/experiences/*?*modal", "/experiences/*/book",
    "/external_link?", "/fix-it", "/fixit", "/forgot_password",
    "/google_place_photo", "/api/v2/google_place_photos", "/groups",
    "/guidebooks", "/help/feedback", "/help/search",
    "/home/dashboard", "/inbox", "/login_with_redirect", "/logout",
    "/manage-listing", "/messaging/ajax_already_messaged/", "/my_listings",
    "/oauth_connect", "/payments/book", "/reservation",
    "/rooms/*/amenities", "/rooms/*/enhanced-cleaning", "/rooms/*/house-rules",
    "/rooms/*/location", "/rooms/*/photos", "/rooms/*/reviews",
    "/rooms/*/safety", "/rooms/*?viralityEntryPoint",
    "/rooms/*/cancellation-policy", "/rooms/*/description",
    "/s/guidebooks", "/signed_out_modal.json", "/signup_modal",
    "/stories", "/trips/upcoming", "/trips/v1/", "/update-your-browser",
    "/users/*/listings", "/users/show", "/s/*?", "/s/*/homes",
    "/things-to-do/places",
)
