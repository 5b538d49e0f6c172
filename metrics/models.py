"""Metric kind and unit models shared by the registry and encoders"""
from enum import Enum
from typing import Optional, Union


class MetricType(Enum):
    """OpenMetrics metric types"""
    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"
    INFO = "info"
    UNKNOWN = "unknown"


class Unit(Enum):
    """Base units from the OpenMetrics specification"""
    AMPERES = "amperes"
    BYTES = "bytes"
    CELSIUS = "celsius"
    GRAMS = "grams"
    JOULES = "joules"
    METERS = "meters"
    RATIOS = "ratios"
    SECONDS = "seconds"
    VOLTS = "volts"


# A plain string is a custom unit and is emitted verbatim
UnitLike = Union[Unit, str]


def unit_to_str(unit: Optional[UnitLike]) -> str:
    """Canonical text for a unit, empty when there is none"""
    if unit is None:
        return ""
    if isinstance(unit, Unit):
        return unit.value
    return str(unit)
