"""
Pagination driver.

Runs fetch+extract cycles one page at a time: consults the policy guard,
fetches with retry and backoff, merges new records, and decides whether to
continue. A run continues only while the extractor reports a next page AND
the page added at least one unseen record AND the page ceiling has not been
reached.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from tenacity import (
    AsyncRetrying, RetryCallState, retry_if_exception_type,
    stop_after_attempt, wait_incrementing,
)

from .constants import DriverState, RunStatus, StopReason
from .errors import NetworkError
from .extractor import BaseExtractor
from .fetcher import BaseFetcher
from .models import FetchPolicy, RunResult, RunState
from .robots import PolicyGuard

# Configure logger
logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class PaginationDriver:
    """Sequential, polite crawl over the pages of one listing."""

    def __init__(
        self,
        policy: FetchPolicy,
        fetcher: BaseFetcher,
        extractor: BaseExtractor,
        guard: Optional[PolicyGuard] = None,
        stop_event: Optional[asyncio.Event] = None,
        sleep: Optional[SleepFunc] = None,
    ):
        """
        Initialize the driver.

        Args:
            policy: Limits, delay and retry settings for the run
            fetcher: Page fetcher, already opened by the caller
            extractor: Site extractor
            guard: Policy guard consulted before every fetch
            stop_event: Event that ends the run at the next page boundary
            sleep: Coroutine used for delays and backoff
        """
        self.policy = policy
        self.fetcher = fetcher
        self.extractor = extractor
        self.guard = guard or PolicyGuard()
        self.stop_event = stop_event or asyncio.Event()
        self._sleep = sleep or asyncio.sleep

    def stop(self):
        """Ask the run to stop before fetching the next page."""
        self.stop_event.set()

    @staticmethod
    def _transition(state: RunState, new_state: DriverState):
        logger.debug(f"Page {state.current_page}: {state.state.value} -> {new_state.value}")
        state.state = new_state

    async def _fetch_with_retries(self, state: RunState, page_number: int, url: str) -> str:
        """
        Fetch a page, retrying NetworkError with linearly increasing backoff.

        Raises:
            NetworkError: The last error once retries are exhausted
        """
        max_attempts = self.policy.max_retries + 1

        def before_sleep(retry_state: RetryCallState):
            state.retries[page_number] = retry_state.attempt_number
            logger.warning(
                f"Fetching page {page_number} failed (attempt {retry_state.attempt_number}/{max_attempts}): "
                f"{retry_state.outcome.exception()}; retrying in {retry_state.next_action.sleep:.1f}s"
            )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_incrementing(start=self.policy.retry_backoff, increment=self.policy.retry_backoff),
            retry=retry_if_exception_type(NetworkError),
            before_sleep=before_sleep,
            sleep=self._sleep,
            reraise=True,
        )

        async for attempt in retrying:
            with attempt:
                content = await self.fetcher.fetch(url)
        return content

    async def run(self) -> RunResult:
        """
        Crawl pages until a stop condition is met.

        Retry exhaustion aborts the run but keeps the records gathered so far.
        Errors other than NetworkError propagate to the caller.

        Returns:
            RunResult with the accumulated records
        """
        state = RunState()
        status = RunStatus.DONE
        ceiling = self.policy.page_ceiling

        logger.info(
            f"Starting crawl of {self.policy.base_url} (page_ceiling={ceiling}, "
            f"delay={self.policy.delay}s, max_retries={self.policy.max_retries})"
        )

        while True:
            if self.stop_event.is_set():
                logger.info(f"Stop requested, ending crawl after page {state.current_page}")
                stop_reason = StopReason.STOPPED
                break

            page_number = state.advance()
            url = self.extractor.page_url(page_number)

            if not self.guard.is_url_allowed(url):
                logger.warning(f"Skipping page {page_number}: {url} is disallowed by exclusion rules")
                state.skipped_pages.append(page_number)
                self._transition(state, DriverState.DECIDING)
                if page_number >= ceiling:
                    stop_reason = StopReason.PAGE_CEILING
                    break
                continue

            self._transition(state, DriverState.FETCHING)
            logger.info(f"Scraping page {page_number}: {url}")
            try:
                content = await self._fetch_with_retries(state, page_number, url)
            except NetworkError as e:
                logger.error(f"Giving up on page {page_number}: {e}")
                status = RunStatus.ABORTED
                stop_reason = StopReason.RETRIES_EXHAUSTED
                break
            state.pages_fetched += 1

            self._transition(state, DriverState.EXTRACTING)
            result = self.extractor.extract(content, page_number)
            new_count = state.merge(result.records)
            logger.info(
                f"Page {page_number}: {len(result.records)} records, {new_count} new, "
                f"{len(state.records)} total"
            )

            self._transition(state, DriverState.DECIDING)
            if not result.has_more:
                stop_reason = StopReason.NO_NEXT_PAGE
                break
            if new_count == 0:
                logger.warning(f"Page {page_number} added no new records, stopping")
                stop_reason = StopReason.NO_NEW_RECORDS
                break
            if page_number >= ceiling:
                stop_reason = StopReason.PAGE_CEILING
                break

            self._transition(state, DriverState.DELAYING)
            await self._sleep(self.policy.delay)

        final_state = DriverState.ABORTED if status == RunStatus.ABORTED else DriverState.DONE
        self._transition(state, final_state)
        logger.info(
            f"Crawl {status.value} ({stop_reason.value}): {len(state.records)} records "
            f"from {state.pages_fetched} pages"
        )

        return RunResult(
            status=status,
            stop_reason=stop_reason,
            records=state.records,
            pages_fetched=state.pages_fetched,
            skipped_pages=state.skipped_pages,
        )
