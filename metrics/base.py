"""Base interface shared by every registrable metric kind"""
from abc import ABC, abstractmethod
from typing import List
from .models import MetricType


class EncodeMetric(ABC):
    """Base class for all metric kinds that can be registered and encoded.

    Subclasses set ``TYPE`` to their fixed MetricType and implement
    ``encode``, which must be safe to call while other threads mutate the
    metric.
    """

    TYPE: MetricType = MetricType.UNKNOWN

    @abstractmethod
    def encode(self, labels: List) -> List:
        """Return this metric's Metric messages with ``labels`` applied"""
        pass

    def metric_type(self) -> MetricType:
        return self.TYPE


class MetricHandle(EncodeMetric):
    """Owning wrapper that hides the concrete metric kind.

    Both calls are forwarded untouched, so encoding through a handle gives
    the same output as encoding the wrapped metric.
    """

    def __init__(self, metric: EncodeMetric):
        if not isinstance(metric, EncodeMetric):
            raise ValueError("Metric must inherit from EncodeMetric")
        self._metric = metric

    @property
    def inner(self) -> EncodeMetric:
        return self._metric

    def encode(self, labels: List) -> List:
        return self._metric.encode(labels)

    def metric_type(self) -> MetricType:
        return self._metric.metric_type()

    def __repr__(self) -> str:
        return f"MetricHandle({self._metric!r})"
