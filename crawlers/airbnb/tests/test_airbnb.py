"""
Tests for the Airbnb extractor and its exclusion rules.
"""

import pytest

from listingscraper.scraper import PolicyGuard

from crawlers.airbnb import AIRBNB_SITE, AirbnbListingExtractor, extract_room_id, SEARCH_URL

MOCK_SEARCH_PAGE = """
<html><body>
  <div itemprop="itemListElement">
    <a href="/rooms/123456?check_in=2024-05-01">
      <img src="https://a0.muscache.com/im/pictures/123456.jpg">
    </a>
    <h3>Cozy loft near Gulshan Lake</h3>
    <span class="_price">$54 night</span>
    <span class="_rating">4.92 (118)</span>
    <span class="_location">Dhaka, Bangladesh</span>
  </div>
  <div itemprop="itemListElement">
    <a href="/rooms/987654"></a>
    <h3>Beach house in Cox's Bazar</h3>
  </div>
  <div itemprop="itemListElement">
    <h3>Listing without a link</h3>
  </div>
  <a aria-label="Next" href="/s/homes?items_offset=18">Next</a>
</body></html>
"""


class TestRoomId:
    """Tests for room id parsing."""

    @pytest.mark.parametrize("url,expected", [
        ("https://www.airbnb.com/rooms/123456", "123456"),
        ("/rooms/42?adults=2", "42"),
        ("https://www.airbnb.com/experiences/55", None),
        (None, None),
    ])
    def test_extract_room_id(self, url, expected):
        assert extract_room_id(url) == expected


class TestAirbnbListingExtractor:
    """Tests for search result extraction."""

    @pytest.fixture
    def extractor(self):
        return AirbnbListingExtractor(SEARCH_URL)

    def test_page_urls(self, extractor):
        assert extractor.page_url(1) == "https://www.airbnb.com/s/homes"
        assert extractor.page_url(2) == "https://www.airbnb.com/s/homes?items_offset=18"
        assert extractor.page_url(4) == "https://www.airbnb.com/s/homes?items_offset=54"

    def test_extract_listings(self, extractor):
        result = extractor.extract(MOCK_SEARCH_PAGE, 1)

        assert [r.key for r in result.records] == ["123456", "987654"]
        first = result.records[0]
        assert first.get("title") == "Cozy loft near Gulshan Lake"
        assert first.get("price") == "$54 night"
        assert first.get("rating") == "4.92 (118)"
        assert first.get("location") == "Dhaka, Bangladesh"
        assert first.get("image_url") == "https://a0.muscache.com/im/pictures/123456.jpg"
        assert first.get("url") == "https://www.airbnb.com/rooms/123456?check_in=2024-05-01"
        assert result.records[1].get("price") is None
        assert result.has_more is True


class TestExclusionRules:
    """Tests for the built-in robots.txt rules."""

    @pytest.fixture
    def guard(self):
        return PolicyGuard(AIRBNB_SITE.exclusion_rules())

    def test_first_search_page_allowed(self, guard):
        assert guard.is_url_allowed(AIRBNB_SITE.create_extractor().page_url(1)) is True

    def test_page_ceiling_stops_before_disallowed_pages(self):
        assert AIRBNB_SITE.policy_overrides()["page_ceiling"] == 1

    def test_later_search_pages_disallowed(self, guard):
        assert guard.is_url_allowed(AIRBNB_SITE.create_extractor().page_url(2)) is False

    def test_room_pages(self, guard):
        assert guard.is_allowed("/rooms/123456") is True
        assert guard.is_allowed("/rooms/123456/photos") is False
        assert guard.is_allowed("/account-settings") is False
