"""Info metric: a fixed set of labels describing the target"""
from typing import Any, List
from .base import EncodeMetric
from .models import MetricType
from .encoding.labels import encode_labels, label_pairs
from .encoding.openmetrics_data_model import InfoValue, Metric, MetricPoint


class Info(EncodeMetric):
    """Immutable info metric, e.g. ``Info([("version", "1.2.0")])``"""

    TYPE = MetricType.INFO

    def __init__(self, labels: Any):
        # Rejects values that are not label-bearing up front
        self._labels = label_pairs(labels)

    def encode(self, labels: List) -> List:
        return [
            Metric(
                labels=labels,
                metric_points=[MetricPoint(info_value=InfoValue(info=encode_labels(self._labels)))],
            )
        ]
