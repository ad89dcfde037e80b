"""
HTML extractors for shop.shajgoj.com.

ShajgojExtractor reads the paginated product catalog; ShajgojCategoryExtractor
reads a rendered product category page.
"""

import logging

from bs4 import Tag

from listingscraper.scraper import BaseExtractor, ExtractionSkip, Record, clean_price, clean_text

from .constants import Selectors, NO_TITLE, NO_PRICE

# Configure logger
logger = logging.getLogger(__name__)


class ShajgojExtractor(BaseExtractor):
    """Extractor for the Shajgoj product catalog."""

    container_selector = Selectors.PRODUCT_LIST
    item_selector = Selectors.PRODUCT_ITEM
    next_page_selector = Selectors.NEXT_PAGE

    def page_url(self, page_number: int) -> str:
        if page_number <= 1:
            return self.base_url
        return f"{self.base_url.rstrip('/')}/page/{page_number}"

    def parse_item(self, element: Tag, page_number: int) -> Record:
        name = self._get_text(element, Selectors.PRODUCT_NAME)
        if not name:
            raise ExtractionSkip("Product has no name")

        price = self._get_text(element, Selectors.PRODUCT_PRICE)
        url = self.resolve_url(self._get_attribute(element, Selectors.PRODUCT_LINK, "href"))

        return Record.create(page_number, key=url or name, name=name, price=clean_price(price), url=url)


class ShajgojCategoryExtractor(BaseExtractor):
    """Extractor for a Shajgoj product category page."""

    item_selector = Selectors.CATEGORY_ITEM
    next_page_selector = Selectors.NEXT_PAGE

    def page_url(self, page_number: int) -> str:
        if page_number <= 1:
            return self.base_url
        return f"{self.base_url.rstrip('/')}/page/{page_number}/"

    def parse_item(self, element: Tag, page_number: int) -> Record:
        title = self._get_text(element, Selectors.CATEGORY_TITLE)
        url = self.resolve_url(self._get_attribute(element, Selectors.CATEGORY_LINK, "href"))

        # Cards are kept when they have either a title or a link
        if not title and not url:
            raise ExtractionSkip("Category card has neither title nor link")
        if not title:
            logger.debug(f"Category card without title: {url}")

        price = clean_text(self._get_text(element, Selectors.CATEGORY_PRICE))

        return Record.create(
            page_number,
            key=url or f"title:{title}",
            title=title or NO_TITLE,
            price=price or NO_PRICE,
            url=url,
        )
