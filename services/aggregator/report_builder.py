"""Report builder: turns accumulated samples into header and rows."""

import logging
from typing import List, Optional, Sequence

from config.models import Report
from config.models.core_models import Cell
from .score_accumulator import MetricRegistry, PageResult
from .score_aggregator import Aggregator

logger = logging.getLogger(__name__)


class ReportBuilder:
    """Build the final report from per-page results."""

    def __init__(self, metadata_headings: Sequence[str]):
        self.metadata_headings = list(metadata_headings)

    # -------------------------
    # Public API
    # -------------------------
    def build(
        self,
        page_results: Sequence[PageResult],
        registry: MetricRegistry,
        aggregator: Aggregator,
    ) -> Report:
        """
        One row per page with data: metadata fields followed by the aggregated
        value of every registered metric. Pages without data are left out.
        """
        metrics = registry.keys()
        headers = self.metadata_headings + [m.title for m in metrics]

        rows: List[List[Cell]] = []
        for result in page_results:
            accumulator = result.accumulator
            if accumulator is None or accumulator.is_empty():
                logger.debug("Skipping %s: no usable samples", result.page.url)
                continue

            row: List[Cell] = list(result.page.metadata_fields)
            for metric in metrics:
                samples = accumulator.samples(metric.id)
                row.append(self._format(aggregator(samples)) if samples else "")
            rows.append(row)

        logger.info(
            "Built report: %d row(s), %d metric column(s)", len(rows), len(metrics)
        )
        return Report(headers=headers, rows=rows, num_pages=len(page_results))

    # -------------------------
    # Helpers
    # -------------------------
    @staticmethod
    def _format(value: Optional[float]) -> Cell:
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value
