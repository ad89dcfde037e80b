"""
Exceptions raised by the crawl loop.

NetworkError and RenderTimeoutError are transient and retried per page by the
pagination driver. ExtractionSkip drops a single item. PersistenceError is
fatal and surfaces to the caller.
"""

from typing import Any, Dict, Optional


class ScraperError(Exception):
    """Base exception for crawl errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize with error message and details."""
        self.details = details or {}
        super().__init__(message)


class NetworkError(ScraperError):
    """Exception raised when a page could not be retrieved."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.status = status
        super().__init__(message, details)


class RenderTimeoutError(NetworkError):
    """Exception raised when a rendered page never shows the expected marker."""
    pass


class ExtractionSkip(ScraperError):
    """Raised by an extractor to drop a single item."""
    pass


class PersistenceError(ScraperError):
    """Exception raised when results cannot be written."""
    pass
