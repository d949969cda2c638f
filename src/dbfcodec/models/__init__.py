"""Pydantic data model for dbfcodec.

This module provides the immutable value, schema and table types produced by
the decoder and consumed by the encoder.
"""

from __future__ import annotations

from .base import DbfModel
from .fields import BoundedInt, UInt8, UInt16, UInt32, UnsignedInt
from .schema import FieldDescriptor, FieldType, Header
from .table import Row, Table
from .values import (
    NULL,
    BooleanValue,
    DateTextValue,
    DateTimeTextValue,
    NullValue,
    NumberValue,
    TextValue,
    Value,
    value_from_python,
)

__all__ = [
    "DbfModel",
    "BoundedInt",
    "UnsignedInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "FieldType",
    "FieldDescriptor",
    "Header",
    "Row",
    "Table",
    "Value",
    "TextValue",
    "NumberValue",
    "BooleanValue",
    "DateTextValue",
    "DateTimeTextValue",
    "NullValue",
    "NULL",
    "value_from_python",
]
