"""
Page fetchers.

This module provides the two interchangeable retrieval strategies used by the
pagination driver: direct HTTP retrieval with aiohttp and rendered retrieval
with a headless Playwright browser. Both are async context managers that hold
their session for the whole run.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional

import aiohttp
from playwright.async_api import (
    Browser, Page, Playwright, async_playwright,
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
)

from .constants import (
    DEFAULT_HEADERS, REQUEST_TIMEOUT, RENDER_TIMEOUT, WAIT_SELECTOR_TIMEOUT,
    BROWSER_ARGS, VIEWPORT, ERROR_MESSAGES,
)
from .errors import NetworkError, RenderTimeoutError

# Configure logger
logger = logging.getLogger(__name__)


def build_headers(user_agent: Optional[str] = None, accept_language: Optional[str] = None) -> Dict[str, str]:
    """Return the default header set with optional overrides."""
    headers = DEFAULT_HEADERS.copy()
    if user_agent:
        headers["User-Agent"] = user_agent
    if accept_language:
        headers["Accept-Language"] = accept_language
    return headers


class BaseFetcher(ABC):
    """Base class for page fetchers."""

    async def open(self):
        """Acquire the fetcher's resources."""

    async def close(self):
        """Release the fetcher's resources."""

    async def __aenter__(self):
        """Async context manager entry."""
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    @abstractmethod
    async def fetch(self, url: str) -> str:
        """
        Retrieve the HTML of a page.

        Args:
            url: URL to fetch

        Returns:
            Response body

        Raises:
            NetworkError: If the page could not be retrieved
        """


class HttpFetcher(BaseFetcher):
    """Direct retrieval with a single aiohttp GET per call."""

    def __init__(
        self,
        timeout: float = REQUEST_TIMEOUT,
        user_agent: Optional[str] = None,
        accept_language: Optional[str] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent header override
            accept_language: Accept-Language header override
        """
        self.timeout = timeout
        self.headers = build_headers(user_agent, accept_language)
        self.session: Optional[aiohttp.ClientSession] = None

    async def _init_session(self):
        """Initialize aiohttp session if not already created."""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(headers=self.headers)

    async def _close_session(self):
        """Close aiohttp session if open."""
        if self.session and not self.session.closed:
            await self.session.close()

    async def open(self):
        await self._init_session()

    async def close(self):
        await self._close_session()

    async def fetch(self, url: str) -> str:
        await self._init_session()

        try:
            start_time = time.time()
            logger.debug(f"Making GET request to {url}")

            async with self.session.get(url, timeout=aiohttp.ClientTimeout(total=self.timeout)) as response:
                response.raise_for_status()
                # Undecodable bytes are replaced rather than failing the page
                html = await response.text(errors="replace")

            elapsed = time.time() - start_time
            logger.debug(f"Request completed in {elapsed:.2f}s")

            return html

        except aiohttp.ClientResponseError as e:
            logger.error(f"HTTP error {e.status} for {url}")
            raise NetworkError(
                ERROR_MESSAGES["HTTP_ERROR"].format(status=e.status, url=url), e.status, {"url": url}
            ) from e
        except asyncio.TimeoutError as e:
            logger.error(f"Request timed out: {url}")
            raise NetworkError(ERROR_MESSAGES["TIMEOUT_ERROR"].format(url=url), details={"url": url}) from e
        except aiohttp.ClientError as e:
            logger.error(f"Connection error for {url}: {e}")
            raise NetworkError(
                ERROR_MESSAGES["CONNECTION_ERROR"].format(url=url), details={"url": url, "error": str(e)}
            ) from e


class RenderedFetcher(BaseFetcher):
    """Rendered retrieval through a headless Chromium session."""

    def __init__(
        self,
        wait_selector: Optional[str] = None,
        navigation_timeout: float = RENDER_TIMEOUT,
        wait_timeout: float = WAIT_SELECTOR_TIMEOUT,
        headless: bool = True,
        user_agent: Optional[str] = None,
        accept_language: Optional[str] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            wait_selector: CSS marker that must appear before content is read
            navigation_timeout: Seconds to wait for the network to go idle
            wait_timeout: Seconds to wait for ``wait_selector``
            headless: Whether to run the browser headless
            user_agent: User-Agent override
            accept_language: Accept-Language override
        """
        self.wait_selector = wait_selector
        self.navigation_timeout = navigation_timeout
        self.wait_timeout = wait_timeout
        self.headless = headless
        self.headers = build_headers(user_agent, accept_language)

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._page: Optional[Page] = None

    async def open(self):
        """Launch the browser and open a page, once."""
        if self._browser is not None:
            return

        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(headless=self.headless, args=BROWSER_ARGS)
            context = await self._browser.new_context(
                user_agent=self.headers["User-Agent"],
                viewport=VIEWPORT,
                extra_http_headers={"Accept-Language": self.headers["Accept-Language"]},
            )
            self._page = await context.new_page()
        except PlaywrightError:
            await self.close()
            raise

        logger.info(f"Browser session started (headless={self.headless})")

    async def close(self):
        """Release the browser session; later calls are no-ops."""
        playwright, browser = self._playwright, self._browser
        self._playwright = self._browser = self._page = None

        try:
            if browser is not None:
                await browser.close()
        finally:
            if playwright is not None:
                await playwright.stop()
                logger.info("Browser session closed")

    async def fetch(self, url: str) -> str:
        if self._page is None:
            await self.open()

        logger.debug(f"Navigating to {url}")
        try:
            response = await self._page.goto(
                url, wait_until="networkidle", timeout=self.navigation_timeout * 1000
            )
        except PlaywrightTimeoutError:
            # Network never went idle; read whatever has rendered so far.
            logger.warning(f"Network did not go idle within {self.navigation_timeout}s on {url}")
            response = None
        except PlaywrightError as e:
            logger.error(f"Navigation failed for {url}: {e}")
            raise NetworkError(
                ERROR_MESSAGES["NAVIGATION_ERROR"].format(url=url), details={"url": url, "error": str(e)}
            ) from e

        if response is not None and not response.ok:
            logger.error(f"HTTP error {response.status} for {url}")
            raise NetworkError(
                ERROR_MESSAGES["HTTP_ERROR"].format(status=response.status, url=url),
                response.status,
                {"url": url},
            )

        if self.wait_selector:
            try:
                await self._page.wait_for_selector(self.wait_selector, timeout=self.wait_timeout * 1000)
            except PlaywrightTimeoutError as e:
                logger.error(f"Marker '{self.wait_selector}' never appeared on {url}")
                raise RenderTimeoutError(
                    ERROR_MESSAGES["RENDER_TIMEOUT"].format(
                        selector=self.wait_selector, url=url, timeout=self.wait_timeout
                    ),
                    details={"url": url},
                ) from e

        try:
            return await self._page.content()
        except PlaywrightError as e:
            logger.error(f"Could not read content of {url}: {e}")
            raise NetworkError(
                ERROR_MESSAGES["CONTENT_ERROR"].format(url=url), details={"url": url, "error": str(e)}
            ) from e
