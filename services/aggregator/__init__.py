"""Score aggregation and reporting for lighthouse-batch."""

from .score_aggregator import median, average, get_aggregator
from .score_accumulator import MetricRegistry, ScoreAccumulator, PageResult
from .report_builder import ReportBuilder
from .csv_exporter import CSVExporter

__all__ = [
    "median", "average", "get_aggregator",
    "MetricRegistry", "ScoreAccumulator", "PageResult",
    "ReportBuilder", "CSVExporter",
]
