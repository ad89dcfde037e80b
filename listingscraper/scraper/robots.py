"""
Robots exclusion rules and the policy guard that consults them.

Patterns are literal paths where ``*`` matches any substring. A path is
disallowed when it starts with the expanded pattern of any rule.
"""

import asyncio
import logging
import re
from typing import Iterable, Iterator, List, Optional, Tuple
from urllib.parse import urlsplit

import aiohttp
import backoff

from .constants import DEFAULT_HEADERS, ERROR_MESSAGES, REQUEST_TIMEOUT, ROBOTS_PATH
from .errors import NetworkError

# Configure logger
logger = logging.getLogger(__name__)


def _is_valid_pattern(pattern: str) -> bool:
    return pattern.startswith(("/", "*"))


def _compile_pattern(pattern: str) -> "re.Pattern[str]":
    return re.compile(".*".join(re.escape(part) for part in pattern.split("*")))


class ExclusionRuleSet:
    """Ordered, immutable set of disallowed path patterns."""

    def __init__(self, patterns: Iterable[str] = ()):
        """
        Initialize the rule set.

        Args:
            patterns: Disallow patterns in evaluation order

        Raises:
            ValueError: If a pattern does not start with '/' or '*'
        """
        patterns = tuple(patterns)
        for pattern in patterns:
            if not _is_valid_pattern(pattern):
                raise ValueError(ERROR_MESSAGES["INVALID_PATTERN"].format(pattern=pattern))
        self._rules: Tuple[Tuple[str, "re.Pattern[str]"], ...] = tuple(
            (pattern, _compile_pattern(pattern)) for pattern in patterns
        )

    @property
    def patterns(self) -> Tuple[str, ...]:
        return tuple(pattern for pattern, _ in self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[str]:
        return iter(self.patterns)

    def __repr__(self) -> str:
        return f"ExclusionRuleSet({len(self)} rules)"

    def first_match(self, url_path: str) -> Optional[str]:
        """Return the first pattern matching ``url_path``, if any."""
        for pattern, regex in self._rules:
            if regex.match(url_path):
                return pattern
        return None

    @classmethod
    def from_robots_txt(cls, text: str, user_agent: str = "*") -> "ExclusionRuleSet":
        """
        Build a rule set from the Disallow lines of a robots.txt document.

        Groups naming ``user_agent`` take precedence over ``*`` groups.
        Allow lines are ignored. Malformed patterns are dropped with a warning.

        Args:
            text: robots.txt content
            user_agent: Agent token to select groups for

        Returns:
            ExclusionRuleSet
        """
        groups: List[Tuple[List[str], List[str]]] = []
        in_rules = False

        for raw_line in text.splitlines():
            line = raw_line.split("#", 1)[0].strip()
            if ":" not in line:
                continue
            field, value = line.split(":", 1)
            field = field.strip().lower()
            value = value.strip()

            if field == "user-agent":
                if not groups or in_rules:
                    groups.append(([], []))
                    in_rules = False
                groups[-1][0].append(value.lower())
            elif field in ("disallow", "allow"):
                if not groups:
                    continue
                in_rules = True
                if field == "disallow" and value:
                    groups[-1][1].append(value)

        agent = user_agent.lower()
        selected = [rules for agents, rules in groups if agent != "*" and agent in agents]
        if not selected:
            selected = [rules for agents, rules in groups if "*" in agents]

        patterns = []
        for rules in selected:
            for pattern in rules:
                if not _is_valid_pattern(pattern):
                    logger.warning(f"Dropping malformed robots.txt pattern: {pattern!r}")
                    continue
                patterns.append(pattern)

        logger.debug(f"Loaded {len(patterns)} exclusion rules for agent '{user_agent}'")
        return cls(patterns)


class PolicyGuard:
    """Decides whether a URL may be fetched at all."""

    def __init__(self, rules: Optional[ExclusionRuleSet] = None):
        self.rules = rules if rules is not None else ExclusionRuleSet()

    def is_allowed(self, url_path: str) -> bool:
        """
        Check a URL path against the exclusion rules.

        Args:
            url_path: Path (optionally with ``?query``) to check

        Returns:
            False if any rule matches, True otherwise
        """
        return self.rules.first_match(url_path) is None

    def is_url_allowed(self, url: str) -> bool:
        """Check an absolute URL by its path and query."""
        parts = urlsplit(url)
        url_path = parts.path or "/"
        if parts.query:
            url_path = f"{url_path}?{parts.query}"
        return self.is_allowed(url_path)


def robots_url(base_url: str) -> str:
    """Return the robots.txt URL for the origin of ``base_url``."""
    parts = urlsplit(base_url)
    return f"{parts.scheme}://{parts.netloc}{ROBOTS_PATH}"


@backoff.on_exception(
    backoff.expo,
    (aiohttp.ClientConnectionError, asyncio.TimeoutError),
    max_tries=3,
    logger=logger,
)
async def _download_robots(session: aiohttp.ClientSession, url: str, timeout: float) -> Optional[str]:
    async with session.get(url, timeout=aiohttp.ClientTimeout(total=timeout)) as response:
        if 400 <= response.status < 500:
            logger.info(f"No robots.txt at {url} (HTTP {response.status})")
            return None
        response.raise_for_status()
        return await response.text()


async def load_exclusion_rules(
    base_url: str,
    user_agent: str = "*",
    timeout: float = REQUEST_TIMEOUT,
    session: Optional[aiohttp.ClientSession] = None,
) -> ExclusionRuleSet:
    """
    Fetch and parse the robots.txt of the site hosting ``base_url``.

    A missing robots.txt (4xx) yields an empty rule set.

    Args:
        base_url: Any URL on the site
        user_agent: Agent token to select robots.txt groups for
        timeout: Request timeout in seconds
        session: Existing aiohttp session to reuse

    Returns:
        ExclusionRuleSet

    Raises:
        NetworkError: If robots.txt cannot be retrieved
    """
    url = robots_url(base_url)
    own_session = session is None
    if own_session:
        session = aiohttp.ClientSession(headers=DEFAULT_HEADERS)

    try:
        text = await _download_robots(session, url, timeout)
    except aiohttp.ClientResponseError as e:
        logger.error(f"HTTP error {e.status} fetching {url}")
        raise NetworkError(ERROR_MESSAGES["HTTP_ERROR"].format(status=e.status, url=url), e.status) from e
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.error(f"Could not fetch {url}: {e}")
        raise NetworkError(ERROR_MESSAGES["CONNECTION_ERROR"].format(url=url), details={"error": str(e)}) from e
    finally:
        if own_session:
            await session.close()

    if text is None:
        return ExclusionRuleSet()
    return ExclusionRuleSet.from_robots_txt(text, user_agent)
