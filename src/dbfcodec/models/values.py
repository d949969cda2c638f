"""Decoded cell values.

Every cell of a decoded row is one of six value kinds. The kinds are separate
Pydantic models joined into a discriminated union on the ``kind`` tag, so a
row serialised with ``model_dump()`` validates back into the same kinds.
"""

from __future__ import annotations

import datetime as dt
from typing import Annotated, Any, Literal, Union

from pydantic import Field

from .base import DbfModel


class TextValue(DbfModel):
    """Character data, memo placeholders and numeric text that did not parse."""

    kind: Literal["text"] = "text"
    value: str

    def to_python(self) -> str:
        return self.value


class NumberValue(DbfModel):
    """Any numeric column, whatever its storage width."""

    kind: Literal["number"] = "number"
    value: float

    def to_python(self) -> float:
        return self.value


class BooleanValue(DbfModel):
    kind: Literal["boolean"] = "boolean"
    value: bool

    def to_python(self) -> bool:
        return self.value


class DateTextValue(DbfModel):
    """A ``D`` column: ``YYYY-MM-DD``, or the raw text when it was not a date."""

    kind: Literal["date"] = "date"
    value: str

    def to_python(self) -> str:
        return self.value


class DateTimeTextValue(DbfModel):
    """A ``T`` column rendered as ``YYYY-MM-DD HH:MM:SS`` (UTC)."""

    kind: Literal["datetime"] = "datetime"
    value: str

    def to_python(self) -> str:
        return self.value


class NullValue(DbfModel):
    kind: Literal["null"] = "null"

    def to_python(self) -> None:
        return None


Value = Annotated[
    Union[TextValue, NumberValue, BooleanValue, DateTextValue, DateTimeTextValue, NullValue],
    Field(discriminator="kind"),
]

VALUE_TYPES = (TextValue, NumberValue, BooleanValue, DateTextValue, DateTimeTextValue, NullValue)

NULL = NullValue()


def format_datetime(moment: dt.datetime) -> str:
    """Render a datetime as ``YYYY-MM-DD HH:MM:SS``.

    Aware datetimes are converted to UTC first. Years below 1000 are
    zero-padded, which strftime does not guarantee on every platform.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(dt.timezone.utc)
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )


def value_from_python(obj: Any) -> Value:
    """Wrap a plain Python object in the matching value kind.

    Args:
        obj: str, int, float, bool, None, datetime.date, datetime.datetime,
            or an existing value (returned unchanged)

    Returns:
        The corresponding value instance

    Raises:
        TypeError: If obj has no value kind

    Example:
        >>> value_from_python(12.5)
        NumberValue(kind='number', value=12.5)
        >>> value_from_python(datetime.date(2024, 3, 1))
        DateTextValue(kind='date', value='2024-03-01')
    """
    if isinstance(obj, VALUE_TYPES):
        return obj
    if obj is None:
        return NULL
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return BooleanValue(value=obj)
    if isinstance(obj, (int, float)):
        return NumberValue(value=float(obj))
    # datetime before date: datetime is a date subclass
    if isinstance(obj, dt.datetime):
        return DateTimeTextValue(value=format_datetime(obj))
    if isinstance(obj, dt.date):
        return DateTextValue(value=obj.isoformat())
    if isinstance(obj, str):
        return TextValue(value=obj)

    raise TypeError(f"Cannot convert {type(obj).__name__} to a DBF value")
