"""Encoding of registries into the OpenMetrics data model"""
from .labels import encode_labels, freeze_labels, label_pairs
from .protobuf import encode, encode_to_bytes

__all__ = [
    'encode',
    'encode_to_bytes',
    'encode_labels',
    'freeze_labels',
    'label_pairs',
]
