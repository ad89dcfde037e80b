"""
Tests for the exclusion rules, the policy guard and robots.txt loading.
"""

import pytest
from unittest.mock import patch, MagicMock, AsyncMock

import aiohttp

from listingscraper.scraper import ExclusionRuleSet, PolicyGuard, NetworkError, load_exclusion_rules
from listingscraper.scraper.robots import robots_url

ROBOTS_TXT = """
# robots.txt for example.com
User-agent: *
Disallow: /account
Disallow: /rooms/*/photos
Disallow:
Allow: /rooms
Disallow: nope-no-slash

User-agent: listingbot
User-agent: otherbot
Disallow: /private
"""


def make_response_cm(status=200, text="", raise_error=None):
    """Create a mock ``session.get`` async context manager."""
    response = MagicMock()
    response.status = status
    response.raise_for_status = MagicMock(side_effect=raise_error)
    response.text = AsyncMock(return_value=text)

    cm = MagicMock()
    cm.__aenter__ = AsyncMock(return_value=response)
    cm.__aexit__ = AsyncMock(return_value=False)
    return cm


class TestPolicyGuard:
    """Tests for path matching."""

    @pytest.fixture
    def guard(self):
        return PolicyGuard(ExclusionRuleSet(["/account", "/rooms/*/photos", "/s/*?", "/external_link?"]))

    def test_exact_match_is_disallowed(self, guard):
        assert guard.is_allowed("/account") is False

    def test_prefix_match_is_disallowed(self, guard):
        assert guard.is_allowed("/account/settings") is False
        assert guard.is_allowed("/accounts-help") is False

    def test_wildcard_match_is_disallowed(self, guard):
        assert guard.is_allowed("/rooms/123456/photos") is False
        assert guard.is_allowed("/rooms/123456/photos/7") is False

    def test_non_match_is_allowed(self, guard):
        assert guard.is_allowed("/rooms/123456") is True
        assert guard.is_allowed("/") is True
        assert guard.is_allowed("/acc") is True

    def test_question_mark_is_literal(self, guard):
        assert guard.is_allowed("/external_link") is True
        assert guard.is_allowed("/external_link?url=x") is False

    def test_url_query_is_checked(self, guard):
        assert guard.is_url_allowed("https://example.com/s/homes") is True
        assert guard.is_url_allowed("https://example.com/s/homes?items_offset=18") is False

    def test_url_without_path(self, guard):
        assert guard.is_url_allowed("https://example.com") is True

    def test_empty_rules_allow_everything(self):
        guard = PolicyGuard()
        assert guard.is_allowed("/account") is True

    def test_first_match_wins(self):
        rules = ExclusionRuleSet(["/a*", "/ab"])
        assert rules.first_match("/abc") == "/a*"
        assert rules.first_match("/xyz") is None

    def test_regex_characters_are_literal(self):
        guard = PolicyGuard(ExclusionRuleSet(["/file.json", "/a+b"]))
        assert guard.is_allowed("/fileXjson") is True
        assert guard.is_allowed("/file.json") is False
        assert guard.is_allowed("/aab") is True
        assert guard.is_allowed("/a+b") is False

    def test_invalid_pattern_rejected(self):
        with pytest.raises(ValueError):
            ExclusionRuleSet(["account"])


class TestRobotsParsing:
    """Tests for robots.txt parsing."""

    def test_wildcard_group(self):
        rules = ExclusionRuleSet.from_robots_txt(ROBOTS_TXT)
        assert rules.patterns == ("/account", "/rooms/*/photos")

    def test_specific_agent_group_takes_precedence(self):
        rules = ExclusionRuleSet.from_robots_txt(ROBOTS_TXT, user_agent="ListingBot")
        assert rules.patterns == ("/private",)

    def test_unknown_agent_uses_wildcard_group(self):
        rules = ExclusionRuleSet.from_robots_txt(ROBOTS_TXT, user_agent="somebot")
        assert "/account" in rules

    def test_empty_document(self):
        assert len(ExclusionRuleSet.from_robots_txt("")) == 0

    def test_robots_url(self):
        assert robots_url("https://shop.example.com/product-category/skin/?x=1") == \
            "https://shop.example.com/robots.txt"


class TestLoadExclusionRules:
    """Tests for fetching robots.txt."""

    @pytest.mark.asyncio
    async def test_load_rules(self):
        session = MagicMock()
        session.get = MagicMock(return_value=make_response_cm(200, ROBOTS_TXT))

        rules = await load_exclusion_rules("https://example.com/listing", session=session)

        assert rules.patterns == ("/account", "/rooms/*/photos")
        assert session.get.call_args[0][0] == "https://example.com/robots.txt"

    @pytest.mark.asyncio
    async def test_missing_robots_allows_everything(self):
        session = MagicMock()
        session.get = MagicMock(return_value=make_response_cm(404))

        rules = await load_exclusion_rules("https://example.com/", session=session)

        assert len(rules) == 0

    @pytest.mark.asyncio
    async def test_server_error_raises_network_error(self):
        error = aiohttp.ClientResponseError(request_info=MagicMock(), history=(), status=503)
        session = MagicMock()
        session.get = MagicMock(return_value=make_response_cm(503, raise_error=error))

        with pytest.raises(NetworkError) as exc_info:
            await load_exclusion_rules("https://example.com/", session=session)

        assert exc_info.value.status == 503

    @pytest.mark.asyncio
    async def test_connection_errors_are_retried(self):
        session = MagicMock()
        session.get = MagicMock(side_effect=aiohttp.ClientConnectionError("refused"))

        with patch("asyncio.sleep", new=AsyncMock()):
            with pytest.raises(NetworkError):
                await load_exclusion_rules("https://example.com/", session=session)

        assert session.get.call_count == 3
