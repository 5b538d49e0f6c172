"""OpenMetrics data model as protobuf message classes

The ``openmetrics`` schema is assembled as a FileDescriptorProto and loaded
into a private descriptor pool, so the message classes behave exactly like
generated ``_pb2`` classes (wire serialization, oneofs, ``MessageToDict``)
without a protoc build step. Field names and numbers follow
``openmetrics_data_model.proto``.
"""
from typing import Dict, Optional
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf import timestamp_pb2


PACKAGE = "openmetrics"
FILE_NAME = "openmetrics_data_model.proto"

_FDP = descriptor_pb2.FieldDescriptorProto
_TIMESTAMP = ".google.protobuf.Timestamp"

_METRIC_TYPE_NAMES = (
    "UNKNOWN",
    "GAUGE",
    "COUNTER",
    "STATE_SET",
    "INFO",
    "HISTOGRAM",
    "GAUGE_HISTOGRAM",
    "SUMMARY",
)


def _ref(name: str) -> str:
    return f".{PACKAGE}.{name}"


def _field(message, name: str, number: int, field_type: int,
           type_name: Optional[str] = None, repeated: bool = False,
           oneof_index: Optional[int] = None):
    """Append a field to a DescriptorProto"""
    field = message.field.add(
        name=name,
        number=number,
        type=field_type,
        label=_FDP.LABEL_REPEATED if repeated else _FDP.LABEL_OPTIONAL,
    )
    if type_name:
        field.type_name = type_name
    if oneof_index is not None:
        field.oneof_index = oneof_index
    return field


def _number_value(file_proto, name: str, oneof_name: str, int_type: int):
    """Message holding a oneof of double_value / int_value"""
    message = file_proto.message_type.add(name=name)
    message.oneof_decl.add(name=oneof_name)
    _field(message, "double_value", 1, _FDP.TYPE_DOUBLE, oneof_index=0)
    _field(message, "int_value", 2, int_type, oneof_index=0)
    return message


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=FILE_NAME,
        package=PACKAGE,
        syntax="proto3",
    )
    file_proto.dependency.append(timestamp_pb2.DESCRIPTOR.name)

    metric_type = file_proto.enum_type.add(name="MetricType")
    for number, name in enumerate(_METRIC_TYPE_NAMES):
        metric_type.value.add(name=name, number=number)

    message = file_proto.message_type.add(name="MetricSet")
    _field(message, "metric_families", 1, _FDP.TYPE_MESSAGE, _ref("MetricFamily"), repeated=True)

    message = file_proto.message_type.add(name="MetricFamily")
    _field(message, "name", 1, _FDP.TYPE_STRING)
    _field(message, "type", 2, _FDP.TYPE_ENUM, _ref("MetricType"))
    _field(message, "unit", 3, _FDP.TYPE_STRING)
    _field(message, "help", 4, _FDP.TYPE_STRING)
    _field(message, "metrics", 5, _FDP.TYPE_MESSAGE, _ref("Metric"), repeated=True)

    message = file_proto.message_type.add(name="Metric")
    _field(message, "labels", 1, _FDP.TYPE_MESSAGE, _ref("Label"), repeated=True)
    _field(message, "metric_points", 2, _FDP.TYPE_MESSAGE, _ref("MetricPoint"), repeated=True)

    message = file_proto.message_type.add(name="Label")
    _field(message, "name", 1, _FDP.TYPE_STRING)
    _field(message, "value", 2, _FDP.TYPE_STRING)

    message = file_proto.message_type.add(name="MetricPoint")
    message.oneof_decl.add(name="value")
    point_values = (
        ("unknown_value", "UnknownValue"),
        ("gauge_value", "GaugeValue"),
        ("counter_value", "CounterValue"),
        ("histogram_value", "HistogramValue"),
        ("state_set_value", "StateSetValue"),
        ("info_value", "InfoValue"),
        ("summary_value", "SummaryValue"),
    )
    for number, (field_name, type_name) in enumerate(point_values, start=1):
        _field(message, field_name, number, _FDP.TYPE_MESSAGE, _ref(type_name), oneof_index=0)
    _field(message, "timestamp", 8, _FDP.TYPE_MESSAGE, _TIMESTAMP)

    _number_value(file_proto, "UnknownValue", "value", _FDP.TYPE_INT64)
    _number_value(file_proto, "GaugeValue", "value", _FDP.TYPE_INT64)

    message = _number_value(file_proto, "CounterValue", "total", _FDP.TYPE_UINT64)
    _field(message, "created", 3, _FDP.TYPE_MESSAGE, _TIMESTAMP)
    _field(message, "exemplar", 4, _FDP.TYPE_MESSAGE, _ref("Exemplar"))

    message = _number_value(file_proto, "HistogramValue", "sum", _FDP.TYPE_INT64)
    _field(message, "count", 3, _FDP.TYPE_UINT64)
    _field(message, "created", 4, _FDP.TYPE_MESSAGE, _TIMESTAMP)
    _field(message, "buckets", 5, _FDP.TYPE_MESSAGE, _ref("HistogramValue.Bucket"), repeated=True)
    bucket = message.nested_type.add(name="Bucket")
    _field(bucket, "count", 1, _FDP.TYPE_UINT64)
    _field(bucket, "upper_bound", 2, _FDP.TYPE_DOUBLE)
    _field(bucket, "exemplar", 3, _FDP.TYPE_MESSAGE, _ref("Exemplar"))

    message = file_proto.message_type.add(name="Exemplar")
    _field(message, "value", 1, _FDP.TYPE_DOUBLE)
    _field(message, "timestamp", 2, _FDP.TYPE_MESSAGE, _TIMESTAMP)
    _field(message, "label", 3, _FDP.TYPE_MESSAGE, _ref("Label"), repeated=True)

    message = file_proto.message_type.add(name="StateSetValue")
    _field(message, "states", 1, _FDP.TYPE_MESSAGE, _ref("StateSetValue.State"), repeated=True)
    state = message.nested_type.add(name="State")
    _field(state, "enabled", 1, _FDP.TYPE_BOOL)
    _field(state, "name", 2, _FDP.TYPE_STRING)

    message = file_proto.message_type.add(name="InfoValue")
    _field(message, "info", 1, _FDP.TYPE_MESSAGE, _ref("Label"), repeated=True)

    message = _number_value(file_proto, "SummaryValue", "sum", _FDP.TYPE_INT64)
    _field(message, "count", 3, _FDP.TYPE_UINT64)
    _field(message, "created", 4, _FDP.TYPE_MESSAGE, _TIMESTAMP)
    _field(message, "quantile", 5, _FDP.TYPE_MESSAGE, _ref("SummaryValue.Quantile"), repeated=True)
    quantile = message.nested_type.add(name="Quantile")
    _field(quantile, "quantile", 1, _FDP.TYPE_DOUBLE)
    _field(quantile, "value", 2, _FDP.TYPE_DOUBLE)

    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(timestamp_pb2.DESCRIPTOR.serialized_pb)
_pool.AddSerializedFile(_build_file().SerializeToString())


def _message(name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.{name}"))


MetricSet = _message("MetricSet")
MetricFamily = _message("MetricFamily")
Metric = _message("Metric")
Label = _message("Label")
MetricPoint = _message("MetricPoint")
UnknownValue = _message("UnknownValue")
GaugeValue = _message("GaugeValue")
CounterValue = _message("CounterValue")
HistogramValue = _message("HistogramValue")
HistogramBucket = _message("HistogramValue.Bucket")
Exemplar = _message("Exemplar")
StateSetValue = _message("StateSetValue")
InfoValue = _message("InfoValue")
SummaryValue = _message("SummaryValue")

METRIC_TYPE_CODES: Dict[str, int] = {
    value.name: value.number
    for value in _pool.FindEnumTypeByName(f"{PACKAGE}.MetricType").values
}

# Integer ranges of the int_value fields; larger totals go out as doubles
UINT64_MAX = 2 ** 64 - 1
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1
