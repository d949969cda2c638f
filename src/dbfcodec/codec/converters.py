"""Per-type conversion between field bytes and values.

Text-encoded types (C, N, F, L, D, M) go through the configured single-byte
code page. Binary types (I, B, Y, T) are little-endian. Every decoder accepts
whatever bytes it is given and degrades instead of failing; every encoder
returns exactly ``field.length`` bytes.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
import re
import struct
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Callable, Optional

from ..config import CodecConfig, resolve_config
from ..exceptions import DecodeError, EncodeError
from ..models.schema import FieldDescriptor, FieldType
from ..models.values import (
    NULL,
    VALUE_TYPES,
    BooleanValue,
    DateTextValue,
    DateTimeTextValue,
    NullValue,
    NumberValue,
    TextValue,
    Value,
    format_datetime,
)
from .policy import degrade
from .text import decode_text, encode_text

logger = logging.getLogger(__name__)

# Julian day number of 1970-01-01
JULIAN_UNIX_EPOCH = 2440588
MS_PER_DAY = 86_400_000
CURRENCY_SCALE = 10_000

INVALID_DATE = "[Invalid Date]"
MEMO_POINTER_FORMAT = "[Memo Pointer: {}]"

_UNIX_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)
_TRUE_MARKS = frozenset("YyTt")
# Wide enough for any double at 255 decimal places
_FIXED_POINT_CONTEXT = Context(prec=1000, rounding=ROUND_HALF_UP)
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_NON_DIGITS = re.compile(r"[^0-9]")
_MEMO_POINTER = re.compile(r"\[Memo Pointer: (.*)\]", re.DOTALL)

_INT32 = struct.Struct("<i")
_INT64 = struct.Struct("<q")
_DOUBLE = struct.Struct("<d")
_JULIAN_DATETIME = struct.Struct("<ii")

Decoder = Callable[[bytes, FieldDescriptor, CodecConfig], Value]
Encoder = Callable[[Value, FieldDescriptor, CodecConfig], bytes]


# ============================================================================
# Shared helpers
# ============================================================================


def _decode_text(raw: bytes, config: CodecConfig) -> str:
    return decode_text(raw, config.encoding)


def _encode_text(text: str, field: FieldDescriptor, config: CodecConfig) -> bytes:
    data, lost = encode_text(text, config.encoding)
    if lost:
        degrade(
            config,
            EncodeError,
            f"Field {field.name}: unencodable characters {lost!r} written as '?'",
            logger,
        )
    return data


def _fit(data: bytes, field: FieldDescriptor, config: CodecConfig, *, right: bool = False) -> bytes:
    """Pad data with spaces to the field width, cutting it if it is too wide."""
    if len(data) > field.length:
        degrade(
            config,
            EncodeError,
            f"Field {field.name}: {len(data)} bytes do not fit in {field.length}, truncating",
            logger,
        )
        data = data[: field.length]
    if right:
        return data.rjust(field.length, b" ")
    return data.ljust(field.length, b" ")


def _fit_binary(packed: bytes, field: FieldDescriptor, config: CodecConfig) -> bytes:
    """Place a packed binary value in the field, zero-filling any extra width."""
    if field.length < len(packed):
        degrade(
            config,
            EncodeError,
            f"Field {field.name}: {len(packed)}-byte value cut to {field.length} bytes",
            logger,
        )
    return packed[: field.length].ljust(field.length, b"\x00")


def _parse_number(text: str, config: CodecConfig) -> Optional[float]:
    """Parse the leading decimal number of text, or return None."""
    if config.thousands_separator:
        text = text.replace(config.thousands_separator, "")
    match = _NUMBER_PREFIX.match(text.strip())
    if match is None:
        return None
    return float(match.group())


def _number_text(number: float) -> str:
    if math.isfinite(number) and number.is_integer():
        return str(int(number))
    return repr(number)


def _fixed_point(number: float, decimal_count: int) -> str:
    """Format a finite number with decimal_count digits, rounding halves away from zero.

    Example:
        >>> _fixed_point(0.125, 2), _fixed_point(-2.5, 0)
        ('0.13', '-3')
    """
    # repr() is the shortest text that reads back as number
    quantized = Decimal(repr(number)).quantize(
        Decimal(1).scaleb(-decimal_count), context=_FIXED_POINT_CONTEXT
    )
    if quantized.is_zero():
        quantized = quantized.copy_abs()
    return f"{quantized:f}"


def _wrap_signed(value: int, bits: int, field: FieldDescriptor, config: CodecConfig) -> int:
    """Wrap value into a signed two's-complement integer of the given width."""
    half = 1 << (bits - 1)
    if -half <= value < half:
        return value
    degrade(
        config,
        EncodeError,
        f"Field {field.name}: {value} does not fit in a signed {bits}-bit integer",
        logger,
    )
    return ((value + half) % (1 << bits)) - half


def _value_as_number(value: Value, field: FieldDescriptor, config: CodecConfig) -> float:
    """Coerce any value to a finite float for the binary numeric types."""
    if isinstance(value, NumberValue):
        number: Optional[float] = value.value
    elif isinstance(value, BooleanValue):
        number = 1.0 if value.value else 0.0
    elif isinstance(value, NullValue):
        number = 0.0
    elif isinstance(value, (TextValue, DateTextValue, DateTimeTextValue)):
        number = _parse_number(value.value, config)
        if number is None and value.value.strip():
            degrade(
                config, EncodeError, f"Field {field.name}: {value.value!r} is not a number", logger
            )
    else:
        raise EncodeError(f"Field {field.name}: unsupported value {value!r}")

    if number is None or not math.isfinite(number):
        return 0.0
    return number


# ============================================================================
# Decoders
# ============================================================================


def _decode_character(raw: bytes, field: FieldDescriptor, config: CodecConfig) -> Value:
    return TextValue(value=_decode_text(raw.rstrip(b" \x00"), config))


def _decode_numeric(raw: bytes, field: FieldDescriptor, config: CodecConfig) -> Value:
    text = _decode_text(raw, config).strip()
    number = _parse_number(text, config)
    if number is not None:
        return NumberValue(value=number)
    if not text:
        return NumberValue(value=0.0)

    degrade(config, DecodeError, f"Field {field.name}: {text!r} is not a number", logger)
    return TextValue(value=text)


def _decode_logical(raw: bytes, field: FieldDescriptor, config: CodecConfig) -> Value:
    text = _decode_text(raw, config).strip()
    return BooleanValue(value=text in _TRUE_MARKS)


def _decode_date(raw: bytes, field: FieldDescriptor, config: CodecConfig) -> Value:
    text = _decode_text(raw, config).strip()
    if not text:
        return DateTextValue(value="")

    digits = _NON_DIGITS.sub("", text)
    if len(digits) == 8:
        try:
            date = dt.date(int(digits[:4]), int(digits[4:6]), int(digits[6:]))
        except ValueError:
            pass
        else:
            return DateTextValue(value=date.isoformat())

    degrade(config, DecodeError, f"Field {field.name}: {text!r} is not a date", logger)
    return DateTextValue(value=text)


def _decode_memo(raw: bytes, field: FieldDescriptor, config: CodecConfig) -> Value:
    pointer = _decode_text(raw, config).strip()
    if not pointer:
        return TextValue(value="")
    return TextValue(value=MEMO_POINTER_FORMAT.format(pointer))


def _decode_integer(raw: bytes, field: FieldDescriptor, config: CodecConfig) -> Value:
    if field.length < _INT32.size or len(raw) < _INT32.size:
        degrade(config, DecodeError, f"Field {field.name}: integer field shorter than 4", logger)
        return NumberValue(value=0.0)
    return NumberValue(value=float(_INT32.unpack_from(raw)[0]))


def _decode_double(raw: bytes, field: FieldDescriptor, config: CodecConfig) -> Value:
    if field.length < _DOUBLE.size or len(raw) < _DOUBLE.size:
        degrade(config, DecodeError, f"Field {field.name}: double field shorter than 8", logger)
        return NumberValue(value=0.0)
    return NumberValue(value=_DOUBLE.unpack_from(raw)[0])


def _decode_currency(raw: bytes, field: FieldDescriptor, config: CodecConfig) -> Value:
    if field.length < _INT64.size or len(raw) < _INT64.size:
        degrade(config, DecodeError, f"Field {field.name}: currency field shorter than 8", logger)
        return NumberValue(value=0.0)
    return NumberValue(value=_INT64.unpack_from(raw)[0] / CURRENCY_SCALE)


def _decode_datetime(raw: bytes, field: FieldDescriptor, config: CodecConfig) -> Value:
    if field.length < _JULIAN_DATETIME.size or len(raw) < _JULIAN_DATETIME.size:
        degrade(config, DecodeError, f"Field {field.name}: datetime field shorter than 8", logger)
        return NULL

    julian_day, ms = _JULIAN_DATETIME.unpack_from(raw)
    if julian_day == 0:
        return NULL

    unix_ms = (julian_day - JULIAN_UNIX_EPOCH) * MS_PER_DAY + ms
    try:
        moment = _UNIX_EPOCH + dt.timedelta(milliseconds=unix_ms)
    except OverflowError:
        degrade(
            config,
            DecodeError,
            f"Field {field.name}: julian day {julian_day} + {ms} ms is out of range",
            logger,
        )
        return TextValue(value=INVALID_DATE)

    return DateTimeTextValue(value=format_datetime(moment))


# ============================================================================
# Encoders
# ============================================================================


def _encode_character(value: Value, field: FieldDescriptor, config: CodecConfig) -> bytes:
    if isinstance(value, (TextValue, DateTextValue, DateTimeTextValue)):
        text = value.value
    elif isinstance(value, NumberValue):
        text = _number_text(value.value)
    elif isinstance(value, BooleanValue):
        text = "T" if value.value else "F"
    elif isinstance(value, NullValue):
        text = ""
    else:
        raise EncodeError(f"Field {field.name}: unsupported value {value!r}")

    return _fit(_encode_text(text, field, config), field, config)


def _encode_numeric(value: Value, field: FieldDescriptor, config: CodecConfig) -> bytes:
    if isinstance(value, NumberValue):
        number: Optional[float] = value.value
    elif isinstance(value, BooleanValue):
        number = 1.0 if value.value else 0.0
    elif isinstance(value, NullValue):
        number = 0.0
    elif isinstance(value, (TextValue, DateTextValue, DateTimeTextValue)):
        number = _parse_number(value.value, config)
        if number is None and value.value.strip():
            # Text that never parsed as a number goes back as it came
            return _fit(_encode_text(value.value.strip(), field, config), field, config, right=True)
    else:
        raise EncodeError(f"Field {field.name}: unsupported value {value!r}")

    if number is None:
        number = 0.0
    if not math.isfinite(number):
        degrade(config, EncodeError, f"Field {field.name}: {number} is not finite", logger)
        number = 0.0

    text = _fixed_point(number, field.decimal_count)
    return _fit(text.encode("ascii"), field, config, right=True)


def _encode_logical(value: Value, field: FieldDescriptor, config: CodecConfig) -> bytes:
    if isinstance(value, BooleanValue):
        flag = value.value
    elif isinstance(value, NumberValue):
        flag = value.value != 0
    elif isinstance(value, (TextValue, DateTextValue, DateTimeTextValue)):
        flag = value.value.strip() in _TRUE_MARKS
    elif isinstance(value, NullValue):
        flag = False
    else:
        raise EncodeError(f"Field {field.name}: unsupported value {value!r}")

    return _fit(b"T" if flag else b"F", field, config)


def _encode_date(value: Value, field: FieldDescriptor, config: CodecConfig) -> bytes:
    if isinstance(value, (DateTextValue, TextValue, DateTimeTextValue)):
        text = value.value.replace("-", "")
    elif isinstance(value, NullValue):
        text = ""
    elif isinstance(value, NumberValue):
        text = _number_text(value.value)
    elif isinstance(value, BooleanValue):
        degrade(config, EncodeError, f"Field {field.name}: boolean is not a date", logger)
        text = ""
    else:
        raise EncodeError(f"Field {field.name}: unsupported value {value!r}")

    return _fit(_encode_text(text, field, config), field, config)


def _encode_memo(value: Value, field: FieldDescriptor, config: CodecConfig) -> bytes:
    """Write a memo pointer back; memo content itself is never written."""
    if isinstance(value, NullValue) or (isinstance(value, TextValue) and not value.value):
        return _fit(b"", field, config)
    if not isinstance(value, VALUE_TYPES):
        raise EncodeError(f"Field {field.name}: unsupported value {value!r}")

    match = _MEMO_POINTER.fullmatch(value.value) if isinstance(value, TextValue) else None
    if match is None:
        degrade(
            config,
            EncodeError,
            f"Field {field.name}: memo content cannot be written, only pointers",
            logger,
        )
        return _fit(b"", field, config)

    return _fit(_encode_text(match.group(1), field, config), field, config, right=True)


def _encode_integer(value: Value, field: FieldDescriptor, config: CodecConfig) -> bytes:
    # int() truncates toward zero
    number = _wrap_signed(int(_value_as_number(value, field, config)), 32, field, config)
    return _fit_binary(_INT32.pack(number), field, config)


def _encode_double(value: Value, field: FieldDescriptor, config: CodecConfig) -> bytes:
    return _fit_binary(_DOUBLE.pack(_value_as_number(value, field, config)), field, config)


def _encode_currency(value: Value, field: FieldDescriptor, config: CodecConfig) -> bytes:
    # Round half up, the way dBase rounds currency
    scaled = math.floor(_value_as_number(value, field, config) * CURRENCY_SCALE + 0.5)
    scaled = _wrap_signed(scaled, 64, field, config)
    return _fit_binary(_INT64.pack(scaled), field, config)


def _parse_moment(text: str) -> Optional[dt.datetime]:
    """Parse an ISO date or date-time; naive values are taken as UTC."""
    text = text.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        moment = dt.datetime.fromisoformat(text)
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt.timezone.utc)
    return moment


def _encode_datetime(value: Value, field: FieldDescriptor, config: CodecConfig) -> bytes:
    unix_ms: Optional[int] = None

    if isinstance(value, (DateTimeTextValue, DateTextValue, TextValue)):
        if value.value.strip():
            moment = _parse_moment(value.value)
            if moment is None:
                degrade(
                    config,
                    EncodeError,
                    f"Field {field.name}: {value.value!r} is not a date-time",
                    logger,
                )
            else:
                unix_ms = (moment - _UNIX_EPOCH) // dt.timedelta(milliseconds=1)
    elif isinstance(value, NumberValue):
        # Numbers are milliseconds since the Unix epoch
        if math.isfinite(value.value):
            unix_ms = int(value.value)
    elif isinstance(value, BooleanValue):
        degrade(config, EncodeError, f"Field {field.name}: boolean is not a date-time", logger)
    elif not isinstance(value, NullValue):
        raise EncodeError(f"Field {field.name}: unsupported value {value!r}")

    if unix_ms is None:
        packed = _JULIAN_DATETIME.pack(0, 0)
    else:
        julian_day = _wrap_signed(unix_ms // MS_PER_DAY + JULIAN_UNIX_EPOCH, 32, field, config)
        packed = _JULIAN_DATETIME.pack(julian_day, unix_ms % MS_PER_DAY)

    return _fit_binary(packed, field, config)


_DECODERS: dict[str, Decoder] = {
    FieldType.CHARACTER.value: _decode_character,
    FieldType.NUMERIC.value: _decode_numeric,
    FieldType.FLOAT.value: _decode_numeric,
    FieldType.LOGICAL.value: _decode_logical,
    FieldType.DATE.value: _decode_date,
    FieldType.DATETIME.value: _decode_datetime,
    FieldType.MEMO.value: _decode_memo,
    FieldType.INTEGER.value: _decode_integer,
    FieldType.DOUBLE.value: _decode_double,
    FieldType.CURRENCY.value: _decode_currency,
}

_ENCODERS: dict[str, Encoder] = {
    FieldType.CHARACTER.value: _encode_character,
    FieldType.NUMERIC.value: _encode_numeric,
    FieldType.FLOAT.value: _encode_numeric,
    FieldType.LOGICAL.value: _encode_logical,
    FieldType.DATE.value: _encode_date,
    FieldType.DATETIME.value: _encode_datetime,
    FieldType.MEMO.value: _encode_memo,
    FieldType.INTEGER.value: _encode_integer,
    FieldType.DOUBLE.value: _encode_double,
    FieldType.CURRENCY.value: _encode_currency,
}


def decode_value(raw: bytes, field: FieldDescriptor, config: CodecConfig | None = None) -> Value:
    """Decode the bytes of one field.

    Args:
        raw: The field's slice of the record (normally field.length bytes)
        field: Descriptor of the field
        config: Codec configuration (lenient default if None)

    Returns:
        Decoded value

    Raises:
        DecodeError: In strict mode, if the bytes do not hold a valid value

    Example:
        >>> decode_value(b"1,234 ", FieldDescriptor(name="N", type_code="N", length=6))
        NumberValue(kind='number', value=1234.0)
    """
    config = resolve_config(config)
    decoder = _DECODERS.get(field.type_code)
    if decoder is None:
        degrade(
            config,
            DecodeError,
            f"Field {field.name}: unsupported type {field.type_code!r}, read as character data",
            logger,
        )
        decoder = _decode_character
    return decoder(raw, field, config)


def encode_value(value: Value, field: FieldDescriptor, config: CodecConfig | None = None) -> bytes:
    """Encode one value into exactly field.length bytes.

    Args:
        value: Value to encode
        field: Descriptor of the field
        config: Codec configuration (lenient default if None)

    Returns:
        field.length bytes

    Raises:
        EncodeError: If the value is not a value kind, or in strict mode if it
            cannot be stored without loss

    Example:
        >>> encode_value(NumberValue(value=3.5), FieldDescriptor(name="N", type_code="N", length=6, decimal_count=2))
        b'  3.50'
    """
    config = resolve_config(config)
    encoder = _ENCODERS.get(field.type_code)
    if encoder is None:
        degrade(
            config,
            EncodeError,
            f"Field {field.name}: unsupported type {field.type_code!r}, written as character data",
            logger,
        )
        encoder = _encode_character
    return encoder(value, field, config)
