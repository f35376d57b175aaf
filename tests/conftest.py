# tests/conftest.py
"""Shared test fixtures.

Hypothesis Configuration:
- "ci" profile: 100 examples (default)
- "debug" profile: 10 examples with verbose output

Set profile via environment variable:
    HYPOTHESIS_PROFILE=debug pytest tests/
"""

import os

import pytest
from hypothesis import Verbosity, settings

from config.settings import AuditConfig
from tests.helpers import FakeEngine

settings.register_profile("ci", max_examples=100)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


@pytest.fixture
def audit_config() -> AuditConfig:
    return AuditConfig(
        error_log_file=None,
        metadata_headings="Name,URL",
        categories=["performance", "seo"],
        num_runs=3,
    )


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()
