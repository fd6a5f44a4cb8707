"""
Table identities — the fully-qualified name of one table.

Engines disagree about how many levels a name has:

    SQLite       table
    Oracle       schema.table
    PostgreSQL   schema.table         (database.schema.table when crossing databases)
    MySQL        database.table
    SQL Server   database.schema.table

TableName is one immutable value type tagged with a NameKind. The kind
fixes the arity and says which component is which, so `.schema` on a
MySQL name is simply None instead of an exception.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidArgumentError


class NameKind(Enum):
    """Which naming hierarchy a TableName follows."""

    TABLE = ("table",)
    SCHEMA_TABLE = ("schema", "table")
    DATABASE_TABLE = ("database", "table")
    DATABASE_SCHEMA_TABLE = ("database", "schema", "table")

    @property
    def labels(self) -> tuple[str, ...]:
        return self.value

    @property
    def arity(self) -> int:
        return len(self.value)

    @property
    def rank(self) -> int:
        return list(NameKind).index(self)


@functools.total_ordering
@dataclass(frozen=True)
class TableName:
    """
    Immutable table identity: a kind plus 1–3 name components,
    most general first (database, schema, table).

    Equality is by kind and components. Ordering compares components
    ordinally in sequence (a strict prefix sorts first), then kind.
    """

    kind: NameKind
    components: tuple[str, ...]

    def __post_init__(self):
        if not isinstance(self.kind, NameKind):
            raise InvalidArgumentError(f"kind must be a NameKind, got {self.kind!r}")
        if self.components is None:
            raise InvalidArgumentError("components must not be None")

        components = tuple(self.components)
        if len(components) != self.kind.arity:
            raise InvalidArgumentError(
                f"{self.kind.name} names take {self.kind.arity} component(s), "
                f"got {len(components)}"
            )
        for label, component in zip(self.kind.labels, components):
            if component is None:
                raise InvalidArgumentError(f"{label} must not be None")
            if not isinstance(component, str):
                raise InvalidArgumentError(
                    f"{label} must be a string, got {type(component).__name__}"
                )
        object.__setattr__(self, "components", components)

    # ── Variant constructors ──────────────────────────────────

    @classmethod
    def of_table(cls, table: str) -> TableName:
        return cls(NameKind.TABLE, (table,))

    @classmethod
    def of_schema_table(cls, schema: str, table: str) -> TableName:
        return cls(NameKind.SCHEMA_TABLE, (schema, table))

    @classmethod
    def of_database_table(cls, database: str, table: str) -> TableName:
        return cls(NameKind.DATABASE_TABLE, (database, table))

    @classmethod
    def of_database_schema_table(cls, database: str, schema: str,
                                 table: str) -> TableName:
        return cls(NameKind.DATABASE_SCHEMA_TABLE, (database, schema, table))

    # ── Accessors ─────────────────────────────────────────────

    def _component(self, label: str) -> str | None:
        try:
            return self.components[self.kind.labels.index(label)]
        except ValueError:
            return None

    @property
    def database(self) -> str | None:
        """Database name, or None when this kind has no database level."""
        return self._component("database")

    @property
    def schema(self) -> str | None:
        """Schema name, or None when this kind has no schema level."""
        return self._component("schema")

    @property
    def table(self) -> str | None:
        return self._component("table")

    def dotted(self) -> str:
        """Components joined with dots — for display, NOT for SQL."""
        return ".".join(self.components)

    # ── Ordering ──────────────────────────────────────────────

    def __lt__(self, other):
        if not isinstance(other, TableName):
            return NotImplemented
        # tuple comparison is element-wise and code-point ordinal; a strict
        # prefix compares smaller
        return (self.components, self.kind.rank) < (other.components, other.kind.rank)

    def __str__(self):
        return self.dotted()
