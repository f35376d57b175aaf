from .core_models import (
    ScoreMethod,
    MetricKind,
    PageSpec,
    MetricKey,
    ErrorEntry,
    Report,
    RunSummary,
)
from .audit_models import (
    RuntimeErrorInfo,
    CategoryResult,
    AuditItem,
    LighthouseResult,
    AuditOptions,
)

__all__ = [
    "ScoreMethod",
    "MetricKind",
    "PageSpec",
    "MetricKey",
    "ErrorEntry",
    "Report",
    "RunSummary",
    "LighthouseResult",
    "AuditOptions",
]
