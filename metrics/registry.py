"""Metrics registry holding registered metrics and their descriptors"""
import threading
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple
from .base import EncodeMetric
from .models import UnitLike
from .encoding.labels import label_pairs
from logging_config import get_logger, log_registration


logger = get_logger(__name__)


@dataclass(frozen=True)
class Descriptor:
    """Immutable metadata a metric is registered under"""
    name: str
    help: str
    unit: Optional[UnitLike] = None
    labels: Tuple = ()


class Registry:
    """
    Central registry for metrics.

    Metrics are yielded in registration order, followed by the metrics of
    each sub-registry in the order the sub-registries were created.
    Sub-registries extend the name prefix and/or the static labels that
    every descriptor registered through them carries.
    """

    def __init__(self, prefix: Optional[str] = None, labels: Any = ()):
        self._prefix = prefix or None
        self._labels: Tuple = label_pairs(labels)
        self._lock = threading.Lock()
        self._metrics: List[Tuple[Descriptor, EncodeMetric]] = []
        self._sub_registries: List["Registry"] = []

    @classmethod
    def from_config(cls, config) -> "Registry":
        """Root registry with the configured prefix and constant labels"""
        return cls(prefix=config.registry_prefix, labels=config.const_labels)

    @property
    def prefix(self) -> Optional[str]:
        return self._prefix

    @property
    def labels(self) -> Tuple:
        return self._labels

    def register(self, name: str, help: str, metric: EncodeMetric) -> None:
        """Register a metric without a unit"""
        self._register(name, help, metric)

    def register_with_unit(self, name: str, help: str, unit: UnitLike, metric: EncodeMetric) -> None:
        """Register a metric with a unit (a Unit member or custom unit text)"""
        self._register(name, help, metric, unit)

    def _register(self, name: str, help: str, metric: EncodeMetric, unit: Optional[UnitLike] = None) -> None:
        if not isinstance(metric, EncodeMetric):
            raise ValueError("Metric must inherit from EncodeMetric")

        descriptor = Descriptor(
            name=f"{self._prefix}_{name}" if self._prefix else name,
            help=help,
            unit=unit,
            labels=self._labels,
        )
        with self._lock:
            self._metrics.append((descriptor, metric))

        log_registration(logger, descriptor.name, metric.metric_type().value, len(descriptor.labels))

    def sub_registry_with_prefix(self, prefix: str) -> "Registry":
        """Child registry whose metric names get ``prefix`` appended to this one's"""
        if self._prefix:
            prefix = f"{self._prefix}_{prefix}"
        return self._add_sub_registry(Registry(prefix=prefix, labels=self._labels))

    def sub_registry_with_label(self, label: Any) -> "Registry":
        """Child registry whose descriptors carry ``label`` after this one's labels"""
        return self._add_sub_registry(Registry(prefix=self._prefix, labels=self._labels + label_pairs(label)))

    def _add_sub_registry(self, registry: "Registry") -> "Registry":
        with self._lock:
            self._sub_registries.append(registry)
        logger.debug(
            "Created sub-registry",
            prefix=registry.prefix,
            labels=registry.labels,
            event_type="sub_registry"
        )
        return registry

    def iter(self) -> Iterator[Tuple[Descriptor, EncodeMetric]]:
        """Yield (descriptor, metric) pairs, depth first, in registration order"""
        with self._lock:
            metrics = list(self._metrics)
            sub_registries = list(self._sub_registries)

        yield from metrics
        for sub_registry in sub_registries:
            yield from sub_registry.iter()

    def __iter__(self) -> Iterator[Tuple[Descriptor, EncodeMetric]]:
        return self.iter()
