"""Rows and tables."""

from __future__ import annotations

from typing import Any, Iterable, ItemsView, Mapping, Optional

from pydantic import Field

from .base import DbfModel
from .schema import FieldDescriptor, Header
from .values import NULL, Value, value_from_python


class Row(DbfModel):
    """One live record: field name to value, in field-descriptor order.

    Example:
        >>> row = Row.from_python({"NAME": "Ada", "AGE": 36})
        >>> row["AGE"]
        NumberValue(kind='number', value=36.0)
        >>> row.to_python()
        {'NAME': 'Ada', 'AGE': 36.0}
    """

    values: dict[str, Value] = Field(default_factory=dict)

    @classmethod
    def from_python(cls, mapping: Mapping[str, Any]) -> Row:
        """Build a row from plain Python values (see value_from_python)."""
        return cls(values={name: value_from_python(obj) for name, obj in mapping.items()})

    def __getitem__(self, name: str) -> Value:
        return self.values[name]

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def get(self, name: str, default: Value = NULL) -> Value:
        return self.values.get(name, default)

    def names(self) -> tuple[str, ...]:
        return tuple(self.values)

    def items(self) -> ItemsView[str, Value]:
        return self.values.items()

    def to_python(self) -> dict[str, Any]:
        return {name: value.to_python() for name, value in self.values.items()}


class Table(DbfModel):
    """A decoded DBF table.

    Deleted records are never materialised, so ``len(rows)`` can be smaller
    than ``header.record_count``.

    Attributes:
        header: File header and field descriptors as stored
        rows: Live records in file order
        file_name: Name the buffer was loaded from, if the caller gave one
    """

    header: Header
    rows: tuple[Row, ...] = ()
    file_name: Optional[str] = None

    @property
    def fields(self) -> tuple[FieldDescriptor, ...]:
        return self.header.fields

    def to_records(self) -> list[dict[str, Any]]:
        """Rows as plain dictionaries, for export and display code."""
        return [row.to_python() for row in self.rows]

    def with_rows(self, rows: Iterable[Row | Mapping[str, Any]]) -> Table:
        """Return a copy of this table holding ``rows``.

        Args:
            rows: Row instances or plain mappings (converted with Row.from_python)

        Returns:
            New Table sharing this table's header and file name
        """
        new_rows = tuple(row if isinstance(row, Row) else Row.from_python(row) for row in rows)
        return self.model_copy(update={"rows": new_rows})
