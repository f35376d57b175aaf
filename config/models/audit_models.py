"""Lighthouse result (LHR) models consumed from the audit engine."""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class RuntimeErrorInfo(BaseModel):
    """Set by Lighthouse when it ran but could not score the page."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    code: Optional[str] = None
    message: str = ""


class CategoryResult(BaseModel):
    """One scored category, score is a fraction in [0, 1] or null."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    title: str
    score: Optional[float] = None


class AuditItem(BaseModel):
    """One individual audit, e.g. first-contentful-paint."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    title: str
    score: Optional[float] = None
    numeric_value: Optional[float] = Field(default=None, alias="numericValue")


class LighthouseResult(BaseModel):
    """Subset of the Lighthouse result object this tool reads."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    runtime_error: Optional[RuntimeErrorInfo] = Field(default=None, alias="runtimeError")
    categories: Dict[str, CategoryResult] = Field(default_factory=dict)
    audits: Dict[str, AuditItem] = Field(default_factory=dict)

    @property
    def has_runtime_error(self) -> bool:
        # Older Lighthouse versions always emit runtimeError with code NO_ERROR.
        err = self.runtime_error
        if err is None:
            return False
        return bool(err.message) or (err.code is not None and err.code != "NO_ERROR")


class AuditOptions(BaseModel):
    """Options passed to the engine for every audit."""
    chrome_flags: List[str] = Field(default_factory=lambda: ["--headless"])
    only_categories: List[str] = Field(default_factory=list)
