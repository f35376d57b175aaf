"""Per-page sample accumulation across repeated audit runs."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Union

from config.models import MetricKey, MetricKind, PageSpec
from services.orchestrator.error_log import ErrorLog
from .score_aggregator import round_half_up

logger = logging.getLogger(__name__)

Number = Union[int, float]


class MetricRegistry:
    """
    Ordered, append-only set of metric keys.

    Keys are registered on first sight, so report columns follow discovery
    order rather than whatever order a result mapping happens to use.
    """

    def __init__(self):
        self._keys: Dict[str, MetricKey] = {}

    def register(self, key: MetricKey) -> MetricKey:
        existing = self._keys.get(key.id)
        if existing is None:
            self._keys[key.id] = key
            logger.debug("Discovered metric %s (%s)", key.id, key.title)
            return key
        return existing

    def keys(self) -> List[MetricKey]:
        return list(self._keys.values())

    def titles(self) -> List[str]:
        return [key.title for key in self._keys.values()]

    def __contains__(self, key_id: str) -> bool:
        return key_id in self._keys

    def __iter__(self) -> Iterator[MetricKey]:
        return iter(list(self._keys.values()))

    def __len__(self) -> int:
        return len(self._keys)


class ScoreAccumulator:
    """Samples gathered for one page, keyed by metric id in run order."""

    def __init__(self, page: PageSpec, error_log: ErrorLog, discard_zero_scores: bool = True):
        self.page = page
        self.error_log = error_log
        self.discard_zero_scores = discard_zero_scores
        self._samples: Dict[str, List[Number]] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def record(self, metric: MetricKey, raw_score: Optional[float]) -> Optional[Number]:
        """
        Convert and store one raw score. Returns the stored value, or None
        when the sample was discarded.
        """
        url = self.page.url
        if raw_score is None:
            self.error_log.append(
                url, f"No {metric.title} score for {url}. This data will be discarded."
            )
            return None

        value = self._convert(metric, raw_score)
        if value == 0 and self.discard_zero_scores:
            self.error_log.append(
                url, f"Zero {metric.title} score for {url}. This data will be discarded."
            )
            return None

        self._samples.setdefault(metric.id, []).append(value)
        logger.info(f"{url}: {metric.title} {value}")
        return value

    def samples(self, metric_id: str) -> List[Number]:
        return list(self._samples.get(metric_id, []))

    def metric_ids(self) -> List[str]:
        return list(self._samples)

    def is_empty(self) -> bool:
        return not self._samples

    def __len__(self) -> int:
        return sum(len(values) for values in self._samples.values())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _convert(self, metric: MetricKey, raw_score: float) -> Number:
        if metric.kind == MetricKind.CATEGORY:
            return round_half_up(raw_score * 100)
        return raw_score


@dataclass
class PageResult:
    """A page and its samples; accumulator is None when nothing usable was recorded."""

    page: PageSpec
    accumulator: Optional[ScoreAccumulator] = None
