"""
Extractor contract and BeautifulSoup helpers.

Site packages subclass BaseExtractor, declare their selectors and implement
``parse_item``. The driver only relies on ``page_url`` and ``extract``.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import List, Optional
from urllib.parse import urlencode, urljoin, urlsplit, parse_qsl, urlunsplit

from bs4 import BeautifulSoup, Tag

from .errors import ExtractionSkip
from .models import PageResult, Record

# Configure logger
logger = logging.getLogger(__name__)


def clean_text(text: Optional[str]) -> str:
    """
    Clean text by removing extra whitespace and normalizing.

    Args:
        text: The text to clean

    Returns:
        Cleaned text string
    """
    if text is None:
        return ""
    return " ".join(text.strip().split())


def clean_price(price_text: Optional[str]) -> str:
    """
    Reduce a price label to its digits, separators and currency sign.

    Args:
        price_text: Text containing a price (e.g., "৳ 1,250.00 BDT")

    Returns:
        Cleaned price string, empty if nothing remains
    """
    if not price_text:
        return ""
    return re.sub(r"[^\d,.৳$€£]", "", clean_text(price_text))


class BaseExtractor(ABC):
    """Base class for site extractors."""

    # CSS selector of the element holding the item list, if any
    container_selector: Optional[str] = None
    # CSS selector of item elements, relative to the container
    item_selector: str = ""
    # CSS selector whose presence means another page exists
    next_page_selector: Optional[str] = None
    # Query parameter used by the default pagination URL form
    page_param: str = "page"

    def __init__(self, base_url: str):
        """
        Initialize the extractor.

        Args:
            base_url: URL of page 1, also used to resolve relative links
        """
        self.base_url = base_url

    def page_url(self, page_number: int) -> str:
        """
        Return the URL of a page; page 1 is the bare base URL.

        The default form appends ``?page=N``.
        """
        if page_number <= 1:
            return self.base_url
        parts = urlsplit(self.base_url)
        query = parse_qsl(parts.query)
        query.append((self.page_param, str(page_number)))
        return urlunsplit(parts._replace(query=urlencode(query)))

    def resolve_url(self, href: Optional[str]) -> Optional[str]:
        """Resolve a possibly relative link against the base URL."""
        if not href:
            return None
        return urljoin(self.base_url, href.strip())

    def extract(self, content: str, page_number: int) -> PageResult:
        """
        Extract records and the continuation signal from a page.

        Args:
            content: Raw HTML of the page
            page_number: Number of the page being extracted

        Returns:
            PageResult with the page's records
        """
        soup = BeautifulSoup(content, "html.parser")
        elements = self.select_items(soup)

        if not elements:
            logger.warning(f"No items found on page {page_number}")

        records = []
        for element in elements:
            try:
                records.append(self.parse_item(element, page_number))
            except ExtractionSkip as e:
                logger.debug(f"Skipping item on page {page_number}: {e}")

        has_more = self.has_next_page(soup)
        logger.info(f"Extracted {len(records)} records from page {page_number} (has_more={has_more})")
        return PageResult(records=records, has_more=has_more)

    def select_items(self, soup: BeautifulSoup) -> List[Tag]:
        """Return the item elements of a page."""
        if self.container_selector:
            container = soup.select_one(self.container_selector)
            if container is None:
                return []
            return container.select(self.item_selector)
        return soup.select(self.item_selector)

    def has_next_page(self, soup: BeautifulSoup) -> bool:
        """Return True when the page links to a next page."""
        if not self.next_page_selector:
            return False
        return soup.select_one(self.next_page_selector) is not None

    @abstractmethod
    def parse_item(self, element: Tag, page_number: int) -> Record:
        """
        Build a record from one item element.

        Raises:
            ExtractionSkip: If the item has no usable title or identifier
        """

    @staticmethod
    def _get_text(element: Tag, selector: str, default: str = "") -> str:
        """
        Get text content of the first match of ``selector`` under ``element``.

        Args:
            element: Element to search in
            selector: CSS selector for the element
            default: Default value if element not found

        Returns:
            Text content of the element or default value
        """
        found = element.select_one(selector)
        if found:
            return clean_text(found.get_text())
        return default

    @staticmethod
    def _get_attribute(element: Tag, selector: str, attribute: str, default: str = "") -> str:
        """
        Get an attribute of the first match of ``selector`` under ``element``.

        Args:
            element: Element to search in
            selector: CSS selector for the element
            attribute: Name of the attribute to get
            default: Default value if element or attribute not found

        Returns:
            Attribute value or default
        """
        found = element.select_one(selector)
        if found and found.has_attr(attribute):
            return found[attribute]
        return default
