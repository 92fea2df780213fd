"""
CSV Package

- codec: shared CSV tokenizer/serializer and the CsvSchema layout type
- schemas: fixed layouts for every entity
- snapshots: where per-change partition snapshots are written
- transfer: import (merge) and export of whole files
- templates: starter files for hand-entered data
"""

from .codec import CsvSchema, DecodeResult, decode, detect_schema, encode
from .snapshots import DirectorySnapshotSink, NullSnapshotSink, SnapshotSink

__all__ = [
    "CsvSchema",
    "DecodeResult",
    "encode",
    "decode",
    "detect_schema",
    "SnapshotSink",
    "DirectorySnapshotSink",
    "NullSnapshotSink",
]
