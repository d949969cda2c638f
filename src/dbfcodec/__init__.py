"""dbfcodec: dBase table codec

A Python library for reading and writing dBase (.dbf) tables as in-memory
byte buffers. Decoding produces an immutable, fully typed Table; encoding
turns a Table back into a byte-exact file buffer.

Key Features:
- Pydantic-based table and value modeling
- Character, numeric, float, logical, date, memo pointer, integer, double,
  currency and date-time columns
- Lenient decoding of damaged files, with an opt-in strict mode
- No I/O of its own: works on bytes you already have

Quick Start:
    >>> from dbfcodec import FieldDescriptor, Header, Row, Table, decode, encode
    >>>
    >>> header = Header.for_fields([FieldDescriptor(name="F", type_code="C", length=5)])
    >>> table = Table(header=header, rows=(Row.from_python({"F": "HELLO"}),))
    >>> data = encode(table)
    >>> len(data)
    72
    >>> decode(data).rows[0]["F"].value
    'HELLO'
"""

from __future__ import annotations

from .codec import (
    decode,
    decode_in_background,
    decode_value,
    describe_version,
    encode,
    encode_in_background,
    encode_value,
)
from .config import CodecConfig
from .exceptions import (
    DbfCodecError,
    DecodeError,
    EncodeError,
    FormatError,
    SchemaError,
)
from .models import (
    NULL,
    BooleanValue,
    DateTextValue,
    DateTimeTextValue,
    FieldDescriptor,
    FieldType,
    Header,
    NullValue,
    NumberValue,
    Row,
    Table,
    TextValue,
    Value,
    value_from_python,
)
from .utils import encoded_size, field_offsets, header_length, record_length

__version__ = "0.1.0"

__all__ = [
    # Core API
    "decode",
    "encode",
    "decode_in_background",
    "encode_in_background",
    "decode_value",
    "encode_value",
    "describe_version",
    # Configuration
    "CodecConfig",
    # Data model
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
    # Exceptions
    "DbfCodecError",
    "FormatError",
    "DecodeError",
    "EncodeError",
    "SchemaError",
    # Sizing
    "encoded_size",
    "field_offsets",
    "header_length",
    "record_length",
    # Version
    "__version__",
]
