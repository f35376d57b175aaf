"""Tests for sample validity and the metric registry."""

from config.models import MetricKey, MetricKind
from services.aggregator.score_accumulator import MetricRegistry, ScoreAccumulator
from services.orchestrator.error_log import ErrorLog
from tests.helpers import page

PERF = MetricKey(id="performance", title="Performance")
FCP = MetricKey(id="audit:first-contentful-paint", title="First Contentful Paint", kind=MetricKind.AUDIT)


def _accumulator(discard_zero_scores=True):
    log = ErrorLog()
    return ScoreAccumulator(page("https://a.example"), log, discard_zero_scores), log


def test_category_score_converted_to_percentage():
    acc, log = _accumulator()
    assert acc.record(PERF, 0.8) == 80
    assert acc.samples("performance") == [80]
    assert len(log) == 0


def test_zero_score_is_discarded_and_logged():
    acc, log = _accumulator()
    assert acc.record(PERF, 0.0) is None
    assert acc.samples("performance") == []
    assert acc.is_empty()
    assert len(log) == 1
    assert "Zero Performance score" in log.entries[0].message


def test_small_score_rounds_to_one_and_is_kept():
    acc, log = _accumulator()
    assert acc.record(PERF, 0.01) == 1
    assert acc.samples("performance") == [1]
    assert len(log) == 0


def test_score_rounding_to_zero_is_discarded():
    acc, log = _accumulator()
    assert acc.record(PERF, 0.004) is None
    assert len(log) == 1


def test_zero_kept_when_discard_disabled():
    acc, log = _accumulator(discard_zero_scores=False)
    assert acc.record(PERF, 0.0) == 0
    assert acc.samples("performance") == [0]
    assert len(log) == 0


def test_missing_score_always_discarded():
    acc, log = _accumulator(discard_zero_scores=False)
    assert acc.record(PERF, None) is None
    assert acc.is_empty()
    assert "No Performance score" in log.entries[0].message


def test_audit_values_not_converted():
    acc, _ = _accumulator()
    assert acc.record(FCP, 1234.5) == 1234.5
    assert acc.samples(FCP.id) == [1234.5]


def test_zero_measurement_discarded():
    acc, log = _accumulator()
    assert acc.record(FCP, 0) is None
    assert len(log) == 1


def test_samples_kept_in_run_order():
    acc, _ = _accumulator()
    for score in (0.9, 0.7, 0.8):
        acc.record(PERF, score)
    assert acc.samples("performance") == [90, 70, 80]
    assert len(acc) == 3


def test_registry_keeps_first_discovered_order():
    registry = MetricRegistry()
    registry.register(MetricKey(id="seo", title="SEO"))
    registry.register(PERF)
    registry.register(MetricKey(id="seo", title="Search"))
    assert [k.id for k in registry] == ["seo", "performance"]
    assert registry.titles() == ["SEO", "Performance"]
    assert "performance" in registry
    assert len(registry) == 2
