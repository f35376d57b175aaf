"""Data models for lighthouse-batch."""

from enum import Enum
from typing import List, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field


# ----------------------------------------------------------------------
# ENUMERATIONS
# ----------------------------------------------------------------------

class ScoreMethod(str, Enum):
    """How per-run samples are reduced to one value."""
    MEDIAN = "median"
    AVERAGE = "average"


class MetricKind(str, Enum):
    """Kinds of scored dimensions."""
    CATEGORY = "category"  # fraction in [0, 1], reported as a percentage
    AUDIT = "audit"        # raw numeric measurement, e.g. milliseconds


# ----------------------------------------------------------------------
# INPUT MODELS
# ----------------------------------------------------------------------

class PageSpec(BaseModel):
    """One input line: page metadata plus the URL to audit."""
    model_config = ConfigDict(frozen=True)

    raw_line: str
    metadata_fields: Tuple[str, ...]
    url: str


class MetricKey(BaseModel):
    """Identifier of a scored dimension, e.g. the performance category."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    kind: MetricKind = MetricKind.CATEGORY


# ----------------------------------------------------------------------
# RESULT MODELS
# ----------------------------------------------------------------------

class ErrorEntry(BaseModel):
    """A single diagnostic recorded during orchestration."""
    context: str
    message: str


Cell = Union[int, float, str]


class Report(BaseModel):
    """Final tabular report: one header and one row per audited page."""
    headers: List[str]
    rows: List[List[Cell]] = Field(default_factory=list)
    num_runs: int = 0
    num_pages: int = 0
    num_errors: int = 0

    class Config:
        json_schema_extra = {
            "example": {
                "headers": ["Name", "Page type", "URL", "Performance", "SEO"],
                "rows": [["John Lewis", "homepage", "https://johnlewis.com", 32, 100]],
                "num_runs": 3,
                "num_pages": 1,
                "num_errors": 0,
            }
        }


class RunSummary(BaseModel):
    """Counters reported when an orchestration finishes."""
    num_runs: int
    num_pages: int
    num_invocations: int
    num_errors: int
    num_reported: int
    duration_ms: Optional[int] = None
