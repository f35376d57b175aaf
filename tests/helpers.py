# tests/helpers.py
"""Test doubles and builders shared across test modules.

FakeEngine stands in for Lighthouse: each URL gets a script of outcomes,
one per run. An outcome is a LighthouseResult, an exception instance to
raise, or a float used as the score of every category.
"""

from typing import Dict, List, Optional, Sequence, Union

from config.models import AuditOptions, LighthouseResult, PageSpec
from engines.base import AuditEngine

Outcome = Union[LighthouseResult, Exception, float]

DEFAULT_TITLES = {
    "performance": "Performance",
    "accessibility": "Accessibility",
    "seo": "SEO",
}


def make_result(
    categories: Optional[Dict[str, Optional[float]]] = None,
    audits: Optional[Dict[str, Optional[float]]] = None,
    runtime_error: Optional[str] = None,
) -> LighthouseResult:
    """Build a LighthouseResult the way the CLI's JSON would look."""
    payload: dict = {"categories": {}, "audits": {}}
    for cat_id, score in (categories or {}).items():
        payload["categories"][cat_id] = {
            "id": cat_id,
            "title": DEFAULT_TITLES.get(cat_id, cat_id),
            "score": score,
        }
    for audit_id, value in (audits or {}).items():
        payload["audits"][audit_id] = {
            "id": audit_id,
            "title": audit_id.replace("-", " ").title(),
            "score": 1,
            "numericValue": value,
        }
    if runtime_error is not None:
        payload["runtimeError"] = {"code": "FAILED_DOCUMENT_REQUEST", "message": runtime_error}
    return LighthouseResult.model_validate(payload)


def page(url: str, *metadata: str) -> PageSpec:
    fields = tuple(metadata) + (url,)
    return PageSpec(raw_line=",".join(fields), metadata_fields=fields, url=url)


class FakeEngine(AuditEngine):
    """Scripted engine that records every call in order."""

    name = "fake"

    def __init__(self, script: Optional[Dict[str, Sequence[Outcome]]] = None, default: Outcome = 0.8):
        self.script = {url: list(outcomes) for url, outcomes in (script or {}).items()}
        self.default = default
        self.calls: List[str] = []
        self.options: List[AuditOptions] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def run_audit(self, url: str, options: AuditOptions) -> LighthouseResult:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            self.calls.append(url)
            self.options.append(options)
            outcomes = self.script.get(url)
            outcome = outcomes.pop(0) if outcomes else self.default
            if isinstance(outcome, Exception):
                raise outcome
            if isinstance(outcome, LighthouseResult):
                return outcome
            return make_result({"performance": outcome, "seo": outcome})
        finally:
            self.in_flight -= 1
