"""
Configuration settings for the ListingScraper application.

This module loads settings from environment variables and provides
configuration values for crawl runs.
"""

from typing import Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from listingscraper.scraper.models import FetchPolicy


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """
    # Logging Settings
    LOG_LEVEL: str = "INFO"

    # Crawl policy defaults (sites may override these)
    SCRAPER_PAGE_CEILING: int = 10
    SCRAPER_REQUEST_DELAY: float = 3.0
    SCRAPER_MAX_RETRIES: int = 3
    SCRAPER_RETRY_BACKOFF: float = 1.5
    SCRAPER_REQUEST_TIMEOUT: float = 10.0

    # Rendered retrieval
    SCRAPER_HEADLESS: bool = True
    SCRAPER_RENDER_TIMEOUT: float = 60.0
    SCRAPER_WAIT_SELECTOR_TIMEOUT: float = 10.0

    # Request identity
    SCRAPER_USER_AGENT: Optional[str] = None
    SCRAPER_ACCEPT_LANGUAGE: str = "en-US,en;q=0.9"

    # Output
    SCRAPER_OUTPUT_DIR: str = "."

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v

    def fetch_policy(self, base_url: str, **overrides: Any) -> FetchPolicy:
        """
        Build a FetchPolicy from these settings.

        Args:
            base_url: Base URL of the crawl
            **overrides: Policy fields that replace the settings values
                (``None`` values are ignored)

        Returns:
            Immutable FetchPolicy
        """
        values = {
            "base_url": base_url,
            "page_ceiling": self.SCRAPER_PAGE_CEILING,
            "delay": self.SCRAPER_REQUEST_DELAY,
            "max_retries": self.SCRAPER_MAX_RETRIES,
            "retry_backoff": self.SCRAPER_RETRY_BACKOFF,
            "timeout": self.SCRAPER_REQUEST_TIMEOUT,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return FetchPolicy(**values)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )


# Create instance of settings to be imported by other modules
settings = Settings()
