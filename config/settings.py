"""Configuration settings for lighthouse-batch."""

import os
from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from functools import lru_cache
import logging

from config.models.core_models import ScoreMethod

load_dotenv()

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

VALID_CATEGORIES = ("performance", "pwa", "best-practices", "accessibility", "seo")


# ----------------------------------------------------------------------
# AUDIT CONFIGURATION
# ----------------------------------------------------------------------

class AuditConfig(BaseSettings):
    """Batch audit configuration."""
    model_config = SettingsConfigDict(env_prefix="AUDIT_", extra="ignore")

    input_file: str = "input.csv"
    output_file: str = "output.csv"
    error_log_file: Optional[str] = "error-log.txt"
    append_output: bool = False

    num_runs: int = Field(default=3, ge=1)
    score_method: ScoreMethod = ScoreMethod.MEDIAN

    categories: List[str] = Field(default_factory=lambda: list(VALID_CATEGORIES))
    audits: List[str] = Field(default_factory=list)
    chrome_flags: List[str] = Field(default_factory=lambda: ["--headless"])

    # Headings for page metadata, written before the metric columns.
    metadata_headings: str = "Name,Page type,URL"
    url_field: Optional[int] = Field(default=None, ge=0)
    delimiter: str = ","
    comment_marker: str = "#"

    discard_zero_scores: bool = True

    lighthouse_path: str = os.getenv("LIGHTHOUSE_PATH", "lighthouse")
    engine_timeout_seconds: float = Field(default=300, gt=0)

    @field_validator("categories")
    @classmethod
    def _check_categories(cls, value: List[str]) -> List[str]:
        unknown = [c for c in value if c not in VALID_CATEGORIES]
        if unknown:
            raise ValueError(
                f"unknown categories {unknown}, expected one or more of {', '.join(VALID_CATEGORIES)}"
            )
        if not value:
            raise ValueError("at least one category is required")
        return value

    @field_validator("chrome_flags")
    @classmethod
    def _dash_flags(cls, value: List[str]) -> List[str]:
        # Flags may be given without dashes, e.g. "headless" or "no-sandbox".
        return [flag if flag.startswith("--") else f"--{flag.lstrip('-')}" for flag in value]

    def headings(self) -> List[str]:
        return [h.strip() for h in self.metadata_headings.split(self.delimiter)]

    def resolve_url_field(self) -> int:
        """Column index where the URL starts; defaults to the last metadata heading."""
        if self.url_field is not None:
            return self.url_field
        return max(len(self.headings()) - 1, 0)


# ----------------------------------------------------------------------
# LOGGING CONFIGURATION
# ----------------------------------------------------------------------

class LoggingConfig(BaseSettings):
    """Logging configuration."""
    model_config = SettingsConfigDict(env_prefix="LOG_", extra="ignore")

    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s [%(levelname)s] %(message)s"


# ----------------------------------------------------------------------
# APP SETTINGS
# ----------------------------------------------------------------------

class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    audit: AuditConfig = Field(default_factory=AuditConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# ----------------------------------------------------------------------
# Lazy accessors (cached singletons)
# ----------------------------------------------------------------------

@lru_cache()
def get_config() -> Settings:
    """Return global app configuration."""
    return Settings()


@lru_cache()
def get_audit_config() -> AuditConfig:
    """Return batch audit configuration."""
    return get_config().audit


@lru_cache()
def get_logging_config() -> LoggingConfig:
    """Return logging configuration."""
    return get_config().logging
