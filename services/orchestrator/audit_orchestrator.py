"""
Audit orchestrator for lighthouse-batch — walks the (run x page) matrix one audit at a time.
"""

import logging
import time
from typing import List, Optional, Sequence

from config.models import AuditOptions, LighthouseResult, MetricKey, MetricKind, PageSpec, Report, RunSummary
from config.settings import AuditConfig
from engines.base import AuditEngine
from services.aggregator.report_builder import ReportBuilder
from services.aggregator.score_accumulator import MetricRegistry, PageResult, ScoreAccumulator
from services.aggregator.score_aggregator import get_aggregator
from .error_log import ErrorLog

logger = logging.getLogger(__name__)


class AuditOrchestrator:
    """
    Audits every page `num_runs` times and builds the aggregated report.

    Pages are audited strictly one after another: the engine owns a single
    browser and is not meant to run concurrent sessions. Within a run pages
    are visited in input order; runs follow each other.
    """

    def __init__(
        self,
        pages: Sequence[PageSpec],
        num_runs: int,
        engine: AuditEngine,
        config: AuditConfig,
        error_log: Optional[ErrorLog] = None,
    ):
        if num_runs < 1:
            raise ValueError(f"num_runs must be a positive integer, got {num_runs}")

        self.pages = list(pages)
        self.num_runs = num_runs
        self.engine = engine
        self.config = config
        self.error_log = error_log if error_log is not None else ErrorLog()

        self.options = AuditOptions(
            chrome_flags=config.chrome_flags,
            only_categories=config.categories,
        )
        self.aggregator = get_aggregator(config.score_method)
        self.registry = MetricRegistry()
        self.accumulators: List[Optional[ScoreAccumulator]] = [None] * len(self.pages)

        self.run_index = 0
        self.page_index = 0
        self.invocations = 0
        self.finished = False
        self.summary: Optional[RunSummary] = None
        self._started = False

    # ----------------------------------------------------------------------
    # Public API
    # ----------------------------------------------------------------------
    async def run(self) -> Report:
        """Run all audits, then build the report exactly once."""
        if self._started:
            raise RuntimeError("AuditOrchestrator.run() can only be called once")
        self._started = True
        start = time.time()

        while self.pages and self.run_index < self.num_runs:
            if self.page_index == 0:
                logger.info(f"Start run {self.run_index + 1}")
            await self._audit_current_page()
            self._advance()

        self.finished = True
        report = self._finish()

        self.summary = RunSummary(
            num_runs=self.num_runs,
            num_pages=len(self.pages),
            num_invocations=self.invocations,
            num_errors=len(self.error_log),
            num_reported=len(report.rows),
            duration_ms=int((time.time() - start) * 1000),
        )
        logger.info(
            f"Completed {self.num_runs} run(s) for {len(self.pages)} URL(s): "
            f"{len(self.error_log)} error(s)"
        )
        return report

    def page_results(self) -> List[PageResult]:
        results = []
        for page, accumulator in zip(self.pages, self.accumulators):
            if accumulator is not None and accumulator.is_empty():
                accumulator = None
            results.append(PageResult(page=page, accumulator=accumulator))
        return results

    # ----------------------------------------------------------------------
    # One (page, run) step
    # ----------------------------------------------------------------------
    async def _audit_current_page(self) -> None:
        page = self.pages[self.page_index]
        url = page.url
        logger.info(
            f"Run {self.run_index + 1} of {self.num_runs}: "
            f"URL {self.page_index + 1} of {len(self.pages)}"
        )

        self.invocations += 1
        try:
            result = await self.engine.audit(url, self.options)
        except Exception as e:
            self.error_log.append(url, f"Caught error for {url}:\n{e}")
            return

        if result.has_runtime_error:
            self.error_log.append(
                url, f"Runtime error for {url}:\n{result.runtime_error.message}"
            )
            return

        if not result.categories:
            self.error_log.append(url, f"No categories returned for {url}")
            return

        self._record(page, result)

    def _record(self, page: PageSpec, result: LighthouseResult) -> None:
        accumulator = self.accumulators[self.page_index]
        if accumulator is None:
            accumulator = ScoreAccumulator(
                page, self.error_log, discard_zero_scores=self.config.discard_zero_scores
            )
            self.accumulators[self.page_index] = accumulator

        for category_id, category in result.categories.items():
            metric = self.registry.register(
                MetricKey(id=category_id, title=category.title, kind=MetricKind.CATEGORY)
            )
            accumulator.record(metric, category.score)

        for audit_id in self.config.audits:
            audit = result.audits.get(audit_id)
            if audit is None:
                self.error_log.append(page.url, f"Audit {audit_id} missing from result for {page.url}")
                continue
            metric = self.registry.register(
                MetricKey(id=f"audit:{audit_id}", title=audit.title, kind=MetricKind.AUDIT)
            )
            accumulator.record(metric, audit.numeric_value)

    def _advance(self) -> None:
        self.page_index += 1
        if self.page_index < len(self.pages):
            return
        self.page_index = 0
        self.run_index += 1

    # ----------------------------------------------------------------------
    # Finished
    # ----------------------------------------------------------------------
    def _finish(self) -> Report:
        builder = ReportBuilder(self.config.headings())
        report = builder.build(self.page_results(), self.registry, self.aggregator)
        report.num_runs = self.num_runs
        report.num_errors = len(self.error_log)
        return report
