"""Label encoding for label-bearing values

A label-bearing value is one of:

- a ``(name, value)`` pair, encoded as a single label,
- a list or tuple of label-bearing values, flattened in order,
- a mapping, one label per item,
- an object with an ``encode_labels()`` method returning labels.
"""
from collections.abc import Mapping
from typing import Any, Hashable, List, Tuple
from .openmetrics_data_model import Label


def _is_pair(value: Any) -> bool:
    return (
        isinstance(value, (tuple, list))
        and len(value) == 2
        and not any(_is_label_bearing(item) for item in value)
    )


def _is_label_bearing(item: Any) -> bool:
    return isinstance(item, (tuple, list, Mapping, Label)) or hasattr(item, "encode_labels")


def encode_labels(value: Any) -> List[Label]:
    """Encode a label-bearing value into an ordered list of Label messages"""
    if isinstance(value, Label):
        return [Label(name=value.name, value=value.value)]
    if hasattr(value, "encode_labels"):
        return list(value.encode_labels())
    if _is_pair(value):
        name, label_value = value
        return [Label(name=str(name), value=str(label_value))]
    if isinstance(value, Mapping):
        return [Label(name=str(name), value=str(label_value)) for name, label_value in value.items()]
    if isinstance(value, (tuple, list)):
        labels = []
        for item in value:
            labels.extend(encode_labels(item))
        return labels
    raise TypeError(f"Not a label-bearing value: {value!r}")


def label_pairs(value: Any) -> Tuple[Tuple[str, str], ...]:
    """Ordered tuple of ``(name, value)`` text pairs for a label-bearing value"""
    return tuple((label.name, label.value) for label in encode_labels(value))


def freeze_labels(value: Any) -> Hashable:
    """Convert a label-bearing value into a canonical hashable key.

    Every form of the same label set maps to one tuple of text pairs: a bare
    pair, a list of pairs and a mapping all agree, and ``200`` equals
    ``"200"``. Mappings are sorted by name so that equal mappings share a
    key. Objects with their own ``encode_labels()`` are kept as-is.
    """
    if hasattr(value, "encode_labels"):
        return value
    if isinstance(value, Mapping):
        value = sorted(value.items(), key=lambda item: str(item[0]))
    return label_pairs(value)
