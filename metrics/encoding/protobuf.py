"""Registry encoder producing the OpenMetrics protobuf data model"""
import time
from ..models import MetricType, unit_to_str
from .labels import encode_labels
from .openmetrics_data_model import METRIC_TYPE_CODES, MetricSet
from logging_config import get_logger, log_encode


logger = get_logger(__name__)


_METRIC_TYPE_CODES = {
    MetricType.COUNTER: METRIC_TYPE_CODES["COUNTER"],
    MetricType.GAUGE: METRIC_TYPE_CODES["GAUGE"],
    MetricType.HISTOGRAM: METRIC_TYPE_CODES["HISTOGRAM"],
    MetricType.INFO: METRIC_TYPE_CODES["INFO"],
    MetricType.UNKNOWN: METRIC_TYPE_CODES["UNKNOWN"],
}


def encode(registry) -> MetricSet:
    """
    Encode every metric of a registry into a MetricSet.

    One MetricFamily is emitted per registered descriptor, in registry
    order. The descriptor's static labels are passed down to the metric,
    which appends them after any labels of its own.

    Args:
        registry: Anything whose ``iter()`` yields (Descriptor, metric) pairs

    Returns:
        MetricSet message
    """
    start_time = time.perf_counter()
    metric_set = MetricSet()
    metric_count = 0

    for descriptor, metric in registry.iter():
        family = metric_set.metric_families.add()
        family.name = descriptor.name
        family.type = _METRIC_TYPE_CODES[metric.metric_type()]
        family.unit = unit_to_str(descriptor.unit)
        family.help = descriptor.help

        metrics = metric.encode(encode_labels(descriptor.labels))
        family.metrics.extend(metrics)
        metric_count += len(metrics)

    log_encode(logger, len(metric_set.metric_families), metric_count, time.perf_counter() - start_time)
    return metric_set


def encode_to_bytes(registry) -> bytes:
    """Encode a registry and serialize the MetricSet to protobuf wire format"""
    return encode(registry).SerializeToString()
