"""Unit tests for field descriptor decoding, validation and encoding."""

from __future__ import annotations

import pytest

from dbfcodec import CodecConfig, DecodeError, FieldDescriptor, SchemaError
from dbfcodec.codec.descriptors import decode_descriptors, encode_descriptors, validate_fields


def descriptor_bytes(name: bytes, type_code: bytes, length: int, decimals: int = 0) -> bytes:
    entry = bytearray(32)
    entry[: len(name)] = name
    entry[11:12] = type_code
    entry[16] = length
    entry[17] = decimals
    return bytes(entry)


HEADER = bytes(32)


class TestDecodeDescriptors:
    """Test decode_descriptors()."""

    def test_two_fields(self) -> None:
        data = (
            HEADER
            + descriptor_bytes(b"NAME", b"C", 20)
            + descriptor_bytes(b"PRICE", b"N", 10, 2)
            + b"\r"
        )

        fields = decode_descriptors(data, len(data))

        assert fields == (
            FieldDescriptor(name="NAME", type_code="C", length=20),
            FieldDescriptor(name="PRICE", type_code="N", length=10, decimal_count=2),
        )

    def test_lowercase_type_code(self) -> None:
        data = HEADER + descriptor_bytes(b"FLAG", b"l", 1) + b"\r"
        assert decode_descriptors(data, len(data))[0].type_code == "L"

    def test_garbage_after_nul(self) -> None:
        """The name ends at the first NUL byte."""
        data = HEADER + descriptor_bytes(b"ID\x00XYZ", b"N", 4) + b"\r"
        assert decode_descriptors(data, len(data))[0].name == "ID"

    def test_stops_at_terminator(self) -> None:
        """A terminator before header_length - 1 ends the list."""
        data = HEADER + descriptor_bytes(b"A", b"C", 1) + b"\r" + b"\x00" * 64
        fields = decode_descriptors(data, len(data))
        assert [f.name for f in fields] == ["A"]

    def test_stops_at_header_length(self) -> None:
        """Entries at or past header_length - 1 are not descriptors."""
        data = HEADER + descriptor_bytes(b"A", b"C", 1) + descriptor_bytes(b"B", b"C", 1) + b"\r"
        fields = decode_descriptors(data, 32 + 32 + 1)
        assert [f.name for f in fields] == ["A"]

    def test_no_fields(self) -> None:
        data = HEADER + b"\r"
        assert decode_descriptors(data, 33) == ()

    def test_truncated_entry(self) -> None:
        data = HEADER + descriptor_bytes(b"A", b"C", 1) + b"B\x00\x00"
        fields = decode_descriptors(data, 32 + 64 + 1)
        assert [f.name for f in fields] == ["A"]

    def test_truncated_entry_strict(self) -> None:
        data = HEADER + descriptor_bytes(b"A", b"C", 1) + b"B\x00\x00"
        with pytest.raises(DecodeError, match="truncated"):
            decode_descriptors(data, 32 + 64 + 1, CodecConfig(strict=True))

    def test_code_page_name(self) -> None:
        data = HEADER + descriptor_bytes(b"PR\xc9S", b"C", 4) + b"\r"
        assert decode_descriptors(data, len(data))[0].name == "PRÉS"

    def test_unassigned_byte_in_name(self) -> None:
        """Bytes cp1252 leaves unassigned survive decode and encode, even in strict mode."""
        entry = descriptor_bytes(b"A\x81B", b"C", 4)
        data = HEADER + entry + b"\r"

        fields = decode_descriptors(data, len(data), CodecConfig(strict=True))

        assert fields[0].name == "A\x81B"
        assert encode_descriptors(fields, CodecConfig(strict=True)) == entry + b"\r"


class TestValidateFields:
    """Test validate_fields()."""

    def test_valid(self) -> None:
        validate_fields(
            [
                FieldDescriptor(name="ABCDEFGHIJ", type_code="C", length=1),
                FieldDescriptor(name="B", type_code="X", length=1),
            ]
        )

    def test_empty_name(self) -> None:
        with pytest.raises(SchemaError, match="empty"):
            validate_fields([FieldDescriptor(name="", type_code="C", length=1)])

    def test_name_too_long(self) -> None:
        with pytest.raises(SchemaError, match="max is 10"):
            validate_fields([FieldDescriptor(name="ABCDEFGHIJK", type_code="C", length=1)])

    def test_unencodable_name(self) -> None:
        with pytest.raises(SchemaError, match="cannot be encoded"):
            validate_fields([FieldDescriptor(name="名前", type_code="C", length=1)])

    def test_duplicate_name(self) -> None:
        field = FieldDescriptor(name="A", type_code="C", length=1)
        with pytest.raises(SchemaError, match="Duplicate"):
            validate_fields([field, field])

    def test_non_ascii_type_code(self) -> None:
        with pytest.raises(SchemaError, match="not ASCII"):
            validate_fields([FieldDescriptor(name="A", type_code="é", length=1)])

    def test_record_too_long(self) -> None:
        fields = [FieldDescriptor(name=f"F{i}", type_code="C", length=255) for i in range(258)]
        with pytest.raises(SchemaError, match="Record length"):
            validate_fields(fields)


class TestEncodeDescriptors:
    """Test encode_descriptors()."""

    def test_layout(self) -> None:
        data = encode_descriptors(
            [FieldDescriptor(name="PRICE", type_code="N", length=10, decimal_count=2)]
        )

        assert len(data) == 33
        assert data[:11] == b"PRICE\x00\x00\x00\x00\x00\x00"
        assert data[11:12] == b"N"
        assert data[16] == 10
        assert data[17] == 2
        assert data[12:16] == b"\x00" * 4
        assert data[18:32] == b"\x00" * 14
        assert data[32] == 0x0D

    def test_empty(self) -> None:
        assert encode_descriptors([]) == b"\r"

    def test_validates(self) -> None:
        with pytest.raises(SchemaError):
            encode_descriptors([FieldDescriptor(name="", type_code="C", length=1)])

    def test_roundtrip(self) -> None:
        fields = (
            FieldDescriptor(name="WHEN", type_code="T", length=8),
            FieldDescriptor(name="NOTE", type_code="M", length=10),
        )
        data = bytes(32) + encode_descriptors(fields)
        assert decode_descriptors(data, len(data)) == fields
