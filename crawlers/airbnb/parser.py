"""
HTML extractor for Airbnb search results.

Listing cards are located through the generic patterns Airbnb uses for its
result list (item list microdata, test ids and card class names).
"""

import re
from typing import Optional

from bs4 import Tag

from listingscraper.scraper import BaseExtractor, ExtractionSkip, Record

from .constants import Selectors, ITEMS_PER_PAGE, OFFSET_PARAM


def extract_room_id(url: Optional[str]) -> Optional[str]:
    """
    Extract the room ID from an Airbnb room URL.

    Args:
        url: URL of the room

    Returns:
        Room ID as string or None if no valid ID found
    """
    if not url:
        return None

    # Extract room ID from URL like /rooms/123456
    room_match = re.search(r"/rooms/(\d+)", url)
    if room_match:
        return room_match.group(1)

    return None


class AirbnbListingExtractor(BaseExtractor):
    """Extractor for Airbnb search result pages."""

    item_selector = Selectors.LISTING
    next_page_selector = Selectors.NEXT_PAGE

    def page_url(self, page_number: int) -> str:
        if page_number <= 1:
            return self.base_url
        separator = "&" if "?" in self.base_url else "?"
        return f"{self.base_url}{separator}{OFFSET_PARAM}={(page_number - 1) * ITEMS_PER_PAGE}"

    def parse_item(self, element: Tag, page_number: int) -> Record:
        title = self._get_text(element, Selectors.LISTING_TITLE)
        if not title:
            raise ExtractionSkip("Listing has no title")

        url = self.resolve_url(self._get_attribute(element, Selectors.LISTING_LINK, "href"))
        room_id = extract_room_id(url)

        return Record.create(
            page_number,
            id=room_id,
            title=title,
            price=self._get_text(element, Selectors.LISTING_PRICE) or None,
            rating=self._get_text(element, Selectors.LISTING_RATING) or None,
            location=self._get_text(element, Selectors.LISTING_LOCATION) or None,
            image_url=self.resolve_url(self._get_attribute(element, Selectors.LISTING_IMAGE, "src")),
            url=url,
        )
