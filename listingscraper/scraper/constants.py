"""
Constants shared by the crawl loop.

This module contains the default request headers, fetch limits and error
messages used by the fetchers, the pagination driver and the sinks.
"""

from enum import Enum

# Fetch policy defaults
PAGE_CEILING = 10  # Pages per run
REQUEST_DELAY = 3.0  # Seconds between pages
RETRY_ATTEMPTS = 3  # Retries after the first attempt
RETRY_BACKOFF = 1.5  # Seconds, multiplied by the attempt number
REQUEST_TIMEOUT = 10  # Seconds

# Rendered retrieval
RENDER_TIMEOUT = 60  # Seconds for navigation to reach network idle
WAIT_SELECTOR_TIMEOUT = 10  # Seconds for the structural marker to appear
BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]
VIEWPORT = {"width": 1366, "height": 768}

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

# Default headers to use in requests
DEFAULT_HEADERS = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

ROBOTS_PATH = "/robots.txt"


class OutputFormat(str, Enum):
    CSV = "csv"
    JSON = "json"


class RunStatus(str, Enum):
    """Terminal status of a crawl run."""
    DONE = "done"
    ABORTED = "aborted"


class DriverState(str, Enum):
    """States of the pagination driver."""
    IDLE = "idle"
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    DECIDING = "deciding"
    DELAYING = "delaying"
    DONE = "done"
    ABORTED = "aborted"


class StopReason(str, Enum):
    """Why the driver stopped paginating."""
    NO_NEXT_PAGE = "no_next_page"
    NO_NEW_RECORDS = "no_new_records"
    PAGE_CEILING = "page_ceiling"
    RETRIES_EXHAUSTED = "retries_exhausted"
    STOPPED = "stopped"


# Error messages
ERROR_MESSAGES = {
    "CONNECTION_ERROR": "Failed to connect to {url}",
    "TIMEOUT_ERROR": "Request timed out while fetching {url}",
    "HTTP_ERROR": "HTTP error {status} while fetching {url}",
    "NAVIGATION_ERROR": "Browser navigation failed for {url}",
    "CONTENT_ERROR": "Could not read rendered content of {url}",
    "RENDER_TIMEOUT": "Marker '{selector}' did not appear on {url} within {timeout}s",
    "PERSISTENCE_ERROR": "Failed to write results to {path}",
    "MISSING_IDENTITY": "Record has no identifier or URL",
    "INVALID_PATTERN": "Exclusion pattern must start with '/' or '*': {pattern!r}",
}
