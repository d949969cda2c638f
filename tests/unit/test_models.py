"""Unit tests for the value, schema and table models."""

from __future__ import annotations

import datetime as dt

import pytest
from pydantic import TypeAdapter, ValidationError

from dbfcodec import (
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
from dbfcodec.models import UInt8, UnsignedInt


class TestValueFromPython:
    """Test value_from_python()."""

    def test_scalars(self) -> None:
        assert value_from_python("abc") == TextValue(value="abc")
        assert value_from_python(3) == NumberValue(value=3.0)
        assert value_from_python(2.5) == NumberValue(value=2.5)
        assert value_from_python(None) == NULL

    def test_bool_is_not_number(self) -> None:
        assert value_from_python(True) == BooleanValue(value=True)
        assert value_from_python(False) == BooleanValue(value=False)

    def test_date(self) -> None:
        assert value_from_python(dt.date(2024, 3, 1)) == DateTextValue(value="2024-03-01")

    def test_datetime(self) -> None:
        moment = dt.datetime(2024, 3, 1, 12, 30, 5, 999000)
        assert value_from_python(moment) == DateTimeTextValue(value="2024-03-01 12:30:05")

    def test_aware_datetime_in_utc(self) -> None:
        tz = dt.timezone(dt.timedelta(hours=2))
        moment = dt.datetime(2024, 3, 1, 1, 0, tzinfo=tz)
        assert value_from_python(moment) == DateTimeTextValue(value="2024-02-29 23:00:00")

    def test_value_unchanged(self) -> None:
        value = TextValue(value="x")
        assert value_from_python(value) is value

    def test_unsupported(self) -> None:
        with pytest.raises(TypeError, match="bytes"):
            value_from_python(b"raw")


class TestValues:
    """Test the value kinds."""

    def test_to_python(self) -> None:
        assert TextValue(value="a").to_python() == "a"
        assert NumberValue(value=1.5).to_python() == 1.5
        assert BooleanValue(value=True).to_python() is True
        assert DateTextValue(value="2024-01-01").to_python() == "2024-01-01"
        assert NullValue().to_python() is None

    def test_frozen(self) -> None:
        value = NumberValue(value=1.0)
        with pytest.raises(ValidationError):
            value.value = 2.0  # type: ignore[misc]

    def test_discriminated_union(self) -> None:
        """Dumped values validate back into the same kind."""
        adapter = TypeAdapter(Value)
        for value in (
            TextValue(value="1"),
            NumberValue(value=1.0),
            BooleanValue(value=True),
            DateTextValue(value="2024-01-01"),
            DateTimeTextValue(value="2024-01-01 00:00:00"),
            NULL,
        ):
            assert adapter.validate_python(value.model_dump()) == value

    def test_kind_tags(self) -> None:
        assert TextValue(value="").kind == "text"
        assert DateTimeTextValue(value="").kind == "datetime"
        assert NULL.kind == "null"


class TestFieldDescriptor:
    """Test FieldDescriptor."""

    def test_type_code_upper_cased(self) -> None:
        assert FieldDescriptor(name="A", type_code="c", length=1).type_code == "C"

    def test_field_type(self) -> None:
        assert FieldDescriptor(name="A", type_code="Y", length=8).field_type is FieldType.CURRENCY
        assert FieldDescriptor(name="A", type_code="G", length=8).field_type is None

    def test_type_code_single_character(self) -> None:
        with pytest.raises(ValidationError):
            FieldDescriptor(name="A", type_code="CC", length=1)
        with pytest.raises(ValidationError):
            FieldDescriptor(name="A", type_code="", length=1)

    def test_length_is_a_byte(self) -> None:
        with pytest.raises(ValidationError):
            FieldDescriptor(name="A", type_code="C", length=256)
        with pytest.raises(ValidationError):
            FieldDescriptor(name="A", type_code="N", length=5, decimal_count=-1)

    def test_unknown_attribute_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FieldDescriptor(name="A", type_code="C", length=1, width=3)  # type: ignore[call-arg]


class TestHeader:
    """Test Header."""

    def test_for_fields(self) -> None:
        fields = [
            FieldDescriptor(name="A", type_code="C", length=10),
            FieldDescriptor(name="B", type_code="I", length=4),
        ]

        header = Header.for_fields(fields, version=0x30, record_count=4)

        assert header.version == 0x30
        assert header.record_count == 4
        assert header.header_length == 97
        assert header.record_length == 15
        assert header.fields == tuple(fields)
        assert header.field_names() == ("A", "B")

    def test_defaults(self) -> None:
        header = Header()
        assert header.version == 0x03
        assert header.last_update is None
        assert header.fields == ()

    def test_bounds(self) -> None:
        with pytest.raises(ValidationError):
            Header(record_count=-1)
        with pytest.raises(ValidationError):
            Header(header_length=70000)


class TestRow:
    """Test Row."""

    def test_mapping_access(self) -> None:
        row = Row.from_python({"NAME": "Ada", "AGE": 36})

        assert row["NAME"] == TextValue(value="Ada")
        assert "AGE" in row
        assert "CITY" not in row
        assert len(row) == 2
        assert row.names() == ("NAME", "AGE")
        assert dict(row.items()) == row.values

    def test_get_defaults_to_null(self) -> None:
        row = Row()
        assert row.get("X") == NULL
        assert row.get("X", TextValue(value="?")) == TextValue(value="?")

    def test_missing_key(self) -> None:
        with pytest.raises(KeyError):
            Row()["X"]

    def test_to_python(self) -> None:
        row = Row.from_python({"NAME": "Ada", "AGE": 36, "OK": True, "NOTE": None})
        assert row.to_python() == {"NAME": "Ada", "AGE": 36.0, "OK": True, "NOTE": None}

    def test_validates_tagged_values(self) -> None:
        row = Row.model_validate({"values": {"A": {"kind": "number", "value": 2}}})
        assert row["A"] == NumberValue(value=2.0)


class TestTable:
    """Test Table."""

    def test_fields_and_records(self, hello_table: Table) -> None:
        assert hello_table.fields == hello_table.header.fields
        assert hello_table.to_records() == [{"F": "HELLO"}]

    def test_with_rows(self, hello_table: Table) -> None:
        edited = hello_table.with_rows([{"F": "A"}, Row.from_python({"F": "B"})])

        assert edited.to_records() == [{"F": "A"}, {"F": "B"}]
        assert edited.header == hello_table.header
        assert hello_table.to_records() == [{"F": "HELLO"}]

    def test_with_rows_keeps_file_name(self) -> None:
        table = Table(header=Header(), file_name="x.dbf")
        assert table.with_rows([]).file_name == "x.dbf"


class TestIntegerFields:
    """Test UnsignedInt() and the UInt aliases."""

    def test_bounds(self) -> None:
        adapter = TypeAdapter(UInt8)
        assert adapter.validate_python(255) == 255
        with pytest.raises(ValidationError):
            adapter.validate_python(256)
        with pytest.raises(ValidationError):
            adapter.validate_python(-1)

    def test_unsupported_width(self) -> None:
        with pytest.raises(ValueError, match="8, 16 or 32"):
            UnsignedInt(bits=24)
