"""
Pydantic models for the crawl loop.

This module contains the extracted Record, the per-page PageResult, the
immutable FetchPolicy, the driver-owned RunState and the terminal RunResult.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    PAGE_CEILING, REQUEST_DELAY, RETRY_ATTEMPTS, RETRY_BACKOFF, REQUEST_TIMEOUT,
    ERROR_MESSAGES, DriverState, RunStatus, StopReason,
)
from .errors import ExtractionSkip


class Record(BaseModel):
    """One extracted item, identified by ``key``."""
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="Identity key used for de-duplication")
    page: int = Field(..., ge=1, description="Page number the record was found on")
    data: Dict[str, Optional[str]] = Field(default_factory=dict, description="Extracted field values")

    @classmethod
    def create(cls, page: int, key: Optional[str] = None, **data: Optional[str]) -> "Record":
        """
        Build a record, deriving its identity when no explicit key is given.

        The identity is ``key``, else the ``id`` field, else the ``url`` field.

        Args:
            page: Page number the record was found on
            key: Explicit identity key
            **data: Field values

        Returns:
            New Record

        Raises:
            ExtractionSkip: If no identity can be derived
        """
        identity = key or data.get("id") or data.get("url")
        if not identity:
            raise ExtractionSkip(ERROR_MESSAGES["MISSING_IDENTITY"], {"data": data})
        return cls(key=identity, page=page, data=data)

    def get(self, name: str, default: Any = None) -> Any:
        """Return a field value; ``page`` is always available."""
        if name == "page":
            return self.page
        value = self.data.get(name)
        return default if value is None else value

    def to_dict(self, columns: Optional[Sequence[str]] = None) -> Dict[str, Any]:
        """Return the record as a flat dict, restricted to ``columns`` when given."""
        if columns is None:
            columns = list(self.data) + ["page"]
        return {column: self.get(column) for column in columns}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


class PageResult(BaseModel):
    """Output of one fetch+extract cycle."""
    records: List[Record] = Field(default_factory=list)
    has_more: bool = Field(False, description="Whether a next page link was found")


class FetchPolicy(BaseModel):
    """Immutable configuration of a crawl run."""
    model_config = ConfigDict(frozen=True)

    base_url: str = Field(..., description="URL of page 1")
    page_ceiling: int = Field(PAGE_CEILING, ge=1, description="Maximum pages per run")
    delay: float = Field(REQUEST_DELAY, ge=0, description="Seconds between pages")
    max_retries: int = Field(RETRY_ATTEMPTS, ge=0, description="Retries per page after the first attempt")
    retry_backoff: float = Field(RETRY_BACKOFF, ge=0, description="Backoff base in seconds")
    timeout: float = Field(REQUEST_TIMEOUT, gt=0, description="Request timeout in seconds")


class RunState(BaseModel):
    """Mutable bookkeeping owned by the pagination driver for one run."""
    current_page: int = 0
    state: DriverState = DriverState.IDLE
    seen_keys: Set[str] = Field(default_factory=set)
    records: List[Record] = Field(default_factory=list)
    retries: Dict[int, int] = Field(default_factory=dict)
    skipped_pages: List[int] = Field(default_factory=list)
    pages_fetched: int = 0

    def advance(self) -> int:
        """Move to the next page and return its number."""
        self.current_page += 1
        return self.current_page

    def merge(self, records: Iterable[Record]) -> int:
        """
        Add records whose identity has not been seen yet.

        Args:
            records: Records extracted from one page

        Returns:
            Number of records that were new
        """
        added = 0
        for record in records:
            if record.key in self.seen_keys:
                continue
            self.seen_keys.add(record.key)
            self.records.append(record)
            added += 1
        return added


class RunResult(BaseModel):
    """Terminal report of a crawl run."""
    status: RunStatus
    stop_reason: StopReason
    records: List[Record] = Field(default_factory=list)
    pages_fetched: int = 0
    skipped_pages: List[int] = Field(default_factory=list)

    @property
    def aborted(self) -> bool:
        return self.status == RunStatus.ABORTED
