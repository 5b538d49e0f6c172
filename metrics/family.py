"""
Label-partitioned metric family.

A Family maps label sets to metric instances of one kind, creating each
instance the first time its label set is used. Entries are never removed.

Usage:
    requests = Family(Counter)
    requests.get_or_create([("method", "GET"), ("status", "200")]).inc()
    requests.labels(method="GET", status="200").inc()

    latency = Family(Histogram, lambda: Histogram(exponential_buckets(0.001, 2.0, 12)))
"""
import threading
from typing import Any, Callable, Dict, Hashable, List, Optional, Type
from .base import EncodeMetric
from .models import MetricType
from .encoding.labels import encode_labels, freeze_labels


class Family(EncodeMetric):
    """Thread-safe mapping from label set to metric instance"""

    def __init__(self, metric_class: Type[EncodeMetric],
                 constructor: Optional[Callable[[], EncodeMetric]] = None):
        """
        Args:
            metric_class: Kind of the metrics held, fixes the family's type
            constructor: Zero-argument factory for new instances, defaults
                to ``metric_class``
        """
        if not (isinstance(metric_class, type) and issubclass(metric_class, EncodeMetric)):
            raise ValueError("Family metric class must inherit from EncodeMetric")

        self._metric_class = metric_class
        self._constructor = constructor or metric_class
        self._lock = threading.Lock()
        self._metrics: Dict[Hashable, EncodeMetric] = {}

    def get_or_create(self, label_set: Any) -> EncodeMetric:
        """
        Return the metric for ``label_set``, creating it on first access.

        Label sets are compared by value; list and dict label sets are
        frozen into hashable keys. At most one instance is ever constructed
        per key, even when several threads race on the first access.
        """
        key = freeze_labels(label_set)

        metric = self._metrics.get(key)
        if metric is not None:
            return metric

        with self._lock:
            metric = self._metrics.get(key)
            if metric is None:
                metric = self._constructor()
                self._metrics[key] = metric
            return metric

    def labels(self, **label_values: Any) -> EncodeMetric:
        """Keyword form of get_or_create; label order does not matter"""
        return self.get_or_create(label_values)

    def keys(self) -> List[Hashable]:
        with self._lock:
            return list(self._metrics.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._metrics)

    def metric_type(self) -> MetricType:
        return self._metric_class.TYPE

    def encode(self, labels: List) -> List:
        # Snapshot the entries; values keep moving while they are encoded
        with self._lock:
            entries = list(self._metrics.items())

        metrics = []
        for label_set, metric in entries:
            metrics.extend(metric.encode(encode_labels(label_set) + list(labels)))
        return metrics

    def __repr__(self) -> str:
        return f"Family({self._metric_class.__name__}, entries={len(self)})"
