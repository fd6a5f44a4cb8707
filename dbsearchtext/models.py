"""Value types produced by introspection and search."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .errors import InvalidArgumentError
from .names import TableName


def _column_set(columns, field: str) -> tuple[str, ...]:
    if columns is None:
        raise InvalidArgumentError(f"{field} must not be None")
    if isinstance(columns, str):
        raise InvalidArgumentError(f"{field} must be an iterable of names, not a string")
    out = set()
    for column in columns:
        if not isinstance(column, str) or not column:
            raise InvalidArgumentError(
                f"none of the elements of {field} may be None or empty, got {column!r}"
            )
        out.add(column)
    return tuple(sorted(out))


@dataclass(frozen=True)
class TableDefinition:
    """
    One table's searchable shape: its name, its primary-key columns
    and its textual columns.

    Both column collections are stored as sorted, de-duplicated tuples,
    so two definitions built from the same names in any order compare
    equal and iterate identically.
    """

    name: TableName
    primary_key_columns: tuple[str, ...]
    text_columns: tuple[str, ...]

    def __post_init__(self):
        if not isinstance(self.name, TableName):
            raise InvalidArgumentError(f"name must be a TableName, got {self.name!r}")
        object.__setattr__(self, "primary_key_columns",
                           _column_set(self.primary_key_columns, "primary_key_columns"))
        object.__setattr__(self, "text_columns",
                           _column_set(self.text_columns, "text_columns"))

    def pertinent_columns(self) -> tuple[str, ...]:
        """Sorted union of primary-key and text columns — the SELECT list."""
        return tuple(sorted(set(self.primary_key_columns) | set(self.text_columns)))


@dataclass(frozen=True)
class TextMatch:
    """
    One hit: a row (identified by its primary key) whose text column
    contains the search substring.

    row_primary_key is kept as (column, value) pairs sorted by column so
    the value stays hashable; use .primary_key for a dict.
    """

    row_primary_key: tuple[tuple[str, str], ...]
    column_name: str
    column_value: str

    def __post_init__(self):
        pairs = self.row_primary_key
        if isinstance(pairs, Mapping):
            pairs = pairs.items()
        elif not isinstance(pairs, Iterable):
            raise InvalidArgumentError(
                f"row_primary_key must be a mapping or pairs, got {pairs!r}"
            )
        normalized = []
        for column, value in pairs:
            if column is None or value is None:
                raise InvalidArgumentError(
                    f"row_primary_key may not hold None, got {column!r}={value!r}"
                )
            normalized.append((str(column), str(value)))
        if not isinstance(self.column_name, str) or not self.column_name:
            raise InvalidArgumentError(
                f"column_name must be a non-empty string, got {self.column_name!r}"
            )
        if not isinstance(self.column_value, str):
            raise InvalidArgumentError(
                f"column_value must be a string, got {self.column_value!r}"
            )
        object.__setattr__(self, "row_primary_key", tuple(sorted(normalized)))

    @property
    def primary_key(self) -> dict[str, str]:
        return dict(self.row_primary_key)
