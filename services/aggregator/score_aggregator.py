"""Score aggregation functions: reduce per-run samples to one value."""

import logging
import math
from typing import Callable, Dict, Sequence, Union

from config.models import ScoreMethod

logger = logging.getLogger(__name__)

Number = Union[int, float]
Aggregator = Callable[[Sequence[Number]], Number]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def median(samples: Sequence[Number]) -> Number:
    """Middle sample, or the mean of the two middle samples. 0 when empty."""
    ordered = sorted(samples)
    if not ordered:
        return 0
    middle = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[middle]
    return (ordered[middle - 1] + ordered[middle]) / 2


def average(samples: Sequence[Number]) -> int:
    """Arithmetic mean rounded to the nearest integer."""
    if not samples:
        raise ValueError("average() requires at least one sample")
    return round_half_up(sum(samples) / len(samples))


AGGREGATORS: Dict[ScoreMethod, Aggregator] = {
    ScoreMethod.MEDIAN: median,
    ScoreMethod.AVERAGE: average,
}


def get_aggregator(method: Union[ScoreMethod, str]) -> Aggregator:
    """Return the aggregation function for a score method."""
    try:
        return AGGREGATORS[ScoreMethod(method)]
    except ValueError:
        raise ValueError(f"Unknown score method: {method!r}, expected median or average")
