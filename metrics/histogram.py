"""
Histogram metric and bucket layout helpers.

Buckets are given as ascending finite upper bounds; an implicit ``+Inf``
bucket always closes the layout. Bucket counts are stored per bucket and
emitted cumulatively, as OpenMetrics requires.

Usage:
    histogram = Histogram(exponential_buckets(0.001, 2.0, 10))
    histogram.observe(0.0042)
"""
import bisect
import math
import threading
from typing import Iterable, List, Tuple
from .base import EncodeMetric
from .models import MetricType
from .encoding.openmetrics_data_model import HistogramBucket, HistogramValue, Metric, MetricPoint


DEFAULT_BUCKETS: Tuple[float, ...] = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)


def exponential_buckets(start: float, factor: float, length: int) -> List[float]:
    """
    Upper bounds growing geometrically from ``start``.

    Args:
        start: First upper bound, must be positive
        factor: Growth factor, must be greater than 1
        length: Number of bounds, must be at least 1

    Returns:
        List of ``length`` bounds
    """
    if start <= 0:
        raise ValueError(f"start must be positive, got {start}")
    if factor <= 1:
        raise ValueError(f"factor must be greater than 1, got {factor}")
    if length < 1:
        raise ValueError(f"length must be at least 1, got {length}")

    return [start * factor ** i for i in range(length)]


def linear_buckets(start: float, width: float, length: int) -> List[float]:
    """Upper bounds ``start, start + width, ...`` of the given length"""
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")
    if length < 1:
        raise ValueError(f"length must be at least 1, got {length}")

    return [start + width * i for i in range(length)]


class Histogram(EncodeMetric):
    """Thread-safe histogram with fixed buckets"""

    TYPE = MetricType.HISTOGRAM

    def __init__(self, buckets: Iterable[float] = DEFAULT_BUCKETS):
        upper_bounds = [float(bound) for bound in buckets]
        if upper_bounds and upper_bounds[-1] == math.inf:
            upper_bounds.pop()
        for lower, upper in zip(upper_bounds, upper_bounds[1:]):
            if upper <= lower:
                raise ValueError(f"Histogram buckets must be strictly increasing: {upper_bounds}")

        self._upper_bounds = upper_bounds + [math.inf]
        self._lock = threading.Lock()
        self._bucket_counts = [0] * len(self._upper_bounds)
        self._sum = 0.0
        self._count = 0

    @classmethod
    def from_config(cls, config) -> "Histogram":
        """Histogram using the configured default bucket layout"""
        return cls(config.histogram_buckets)

    @property
    def upper_bounds(self) -> List[float]:
        return list(self._upper_bounds)

    def observe(self, value: float) -> None:
        index = bisect.bisect_left(self._upper_bounds, value)
        with self._lock:
            self._sum += value
            self._count += 1
            self._bucket_counts[index] += 1

    def get(self) -> Tuple[float, int, List[Tuple[float, int]]]:
        """
        Consistent snapshot of the histogram.

        Returns:
            (sum, count, [(upper_bound, cumulative_count), ...])
        """
        with self._lock:
            total, count, bucket_counts = self._sum, self._count, list(self._bucket_counts)

        buckets = []
        cumulative = 0
        for upper_bound, bucket_count in zip(self._upper_bounds, bucket_counts):
            cumulative += bucket_count
            buckets.append((upper_bound, cumulative))
        return total, count, buckets

    def encode(self, labels: List) -> List:
        total, count, buckets = self.get()
        histogram_value = HistogramValue(
            double_value=total,
            count=count,
            buckets=[
                HistogramBucket(upper_bound=upper_bound, count=cumulative)
                for upper_bound, cumulative in buckets
            ],
        )

        return [
            Metric(
                labels=labels,
                metric_points=[MetricPoint(histogram_value=histogram_value)],
            )
        ]
