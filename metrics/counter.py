"""Monotonic counter metric"""
import math
import threading
from typing import List, Union
from .base import EncodeMetric
from .models import MetricType
from .encoding.openmetrics_data_model import UINT64_MAX, CounterValue, Metric, MetricPoint

Number = Union[int, float]


class Counter(EncodeMetric):
    """
    Thread-safe monotonically increasing counter.

    Usage:
        counter = Counter()
        counter.inc()
        counter.inc_by(5)
        counter.get()  # 6

    The total stays an integer until it is incremented by a float.
    """

    TYPE = MetricType.COUNTER

    def __init__(self):
        self._lock = threading.Lock()
        self._value: Number = 0

    def inc(self) -> Number:
        """Increment by one, returning the previous total"""
        return self.inc_by(1)

    def inc_by(self, amount: Number) -> Number:
        """
        Increment by ``amount``, returning the previous total.

        Args:
            amount: Non-negative increment

        Raises:
            ValueError: If amount is negative, NaN or infinite
        """
        if isinstance(amount, float) and not math.isfinite(amount):
            raise ValueError(f"Counters can only be incremented by finite amounts, got {amount}")
        if amount < 0:
            raise ValueError(f"Counters can only be incremented by non-negative amounts, got {amount}")

        with self._lock:
            previous = self._value
            self._value += amount
            return previous

    def get(self) -> Number:
        """Current total"""
        with self._lock:
            return self._value

    def encode(self, labels: List) -> List:
        total = self.get()
        if isinstance(total, float) or total > UINT64_MAX:
            counter_value = CounterValue(double_value=float(total))
        else:
            counter_value = CounterValue(int_value=total)

        return [
            Metric(
                labels=labels,
                metric_points=[MetricPoint(counter_value=counter_value)],
            )
        ]

    def __repr__(self) -> str:
        return f"Counter(value={self.get()})"
