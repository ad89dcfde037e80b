"""
Site definitions.

A Site bundles everything site-specific about a crawl: where it starts, how
pages are extracted, which columns are written and which fetch defaults and
exclusion rules apply.
"""

from typing import Dict, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field

from .constants import OutputFormat
from .extractor import BaseExtractor
from .robots import ExclusionRuleSet


class Site(BaseModel):
    """Registered crawl target."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="Registry name")
    base_url: str = Field(..., description="URL of page 1")
    extractor_class: Type[BaseExtractor]
    columns: Tuple[str, ...] = Field(..., description="Output columns, in order")
    headers: Dict[str, str] = Field(default_factory=dict, description="Column display labels")
    output_file: str
    output_format: OutputFormat = OutputFormat.CSV

    rendered: bool = Field(False, description="Whether pages need a browser")
    wait_selector: Optional[str] = Field(None, description="Marker to wait for when rendered")

    page_ceiling: Optional[int] = None
    delay: Optional[float] = None
    max_retries: Optional[int] = None
    timeout: Optional[float] = None

    exclusion_patterns: Tuple[str, ...] = ()

    def create_extractor(self) -> BaseExtractor:
        return self.extractor_class(self.base_url)

    def exclusion_rules(self) -> ExclusionRuleSet:
        return ExclusionRuleSet(self.exclusion_patterns)

    def policy_overrides(self) -> Dict[str, Optional[float]]:
        return {
            "page_ceiling": self.page_ceiling,
            "delay": self.delay,
            "max_retries": self.max_retries,
            "timeout": self.timeout,
        }
