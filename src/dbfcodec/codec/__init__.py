"""DBF binary codec.

This module provides decoding of DBF file buffers into tables and encoding of
tables back into byte-exact buffers.
"""

from __future__ import annotations

from .background import decode_in_background, encode_in_background
from .converters import decode_value, encode_value
from .descriptors import decode_descriptors, encode_descriptors, validate_fields
from .header import decode_header, describe_version, encode_header
from .record import decode_record, encode_record
from .table import decode, encode

__all__ = [
    "decode",
    "encode",
    "decode_in_background",
    "encode_in_background",
    "decode_header",
    "encode_header",
    "describe_version",
    "decode_descriptors",
    "encode_descriptors",
    "validate_fields",
    "decode_record",
    "encode_record",
    "decode_value",
    "encode_value",
]
