"""In-process metrics registry with OpenMetrics data model encoding"""
from .models import MetricType, Unit
from .base import EncodeMetric, MetricHandle
from .counter import Counter
from .gauge import Gauge
from .histogram import Histogram, exponential_buckets, linear_buckets
from .info import Info
from .family import Family
from .registry import Descriptor, Registry

__all__ = [
    'MetricType',
    'Unit',
    'EncodeMetric',
    'MetricHandle',
    'Counter',
    'Gauge',
    'Histogram',
    'exponential_buckets',
    'linear_buckets',
    'Info',
    'Family',
    'Descriptor',
    'Registry',
]
