"""Gauge metric"""
import threading
from typing import List, Union
from .base import EncodeMetric
from .models import MetricType
from .encoding.openmetrics_data_model import INT64_MAX, INT64_MIN, GaugeValue, Metric, MetricPoint

Number = Union[int, float]


class Gauge(EncodeMetric):
    """Thread-safe value that can go up and down.

    Every mutator returns the previous value.
    """

    TYPE = MetricType.GAUGE

    def __init__(self):
        self._lock = threading.Lock()
        self._value: Number = 0

    def set(self, value: Number) -> Number:
        with self._lock:
            previous = self._value
            self._value = value
            return previous

    def inc(self) -> Number:
        return self.inc_by(1)

    def inc_by(self, amount: Number) -> Number:
        with self._lock:
            previous = self._value
            self._value += amount
            return previous

    def dec(self) -> Number:
        return self.dec_by(1)

    def dec_by(self, amount: Number) -> Number:
        with self._lock:
            previous = self._value
            self._value -= amount
            return previous

    def get(self) -> Number:
        with self._lock:
            return self._value

    def encode(self, labels: List) -> List:
        value = self.get()
        if isinstance(value, float) or not INT64_MIN <= value <= INT64_MAX:
            gauge_value = GaugeValue(double_value=float(value))
        else:
            gauge_value = GaugeValue(int_value=value)

        return [
            Metric(
                labels=labels,
                metric_points=[MetricPoint(gauge_value=gauge_value)],
            )
        ]

    def __repr__(self) -> str:
        return f"Gauge(value={self.get()})"
