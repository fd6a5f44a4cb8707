"""
Abstract dialect adapter.

Every dialect implements the same surface:

    list_tables()                       → iterator of TableName
    get_table_definition(name)          → TableDefinition
    get_substring_matches(tdef, text)   → iterator of TextMatch

An adapter owns one live DB-API connection from construction until
close(). It is a context manager; close() is safe to call twice.

Catalog knowledge (which views to read, what counts as a primary key or
a text type) lives in the subclasses. Statement assembly for the search
lives here, with small hooks for where the SQL syntax diverges.
"""

import logging
from abc import ABC, abstractmethod

from .errors import DatabaseConnectionError, InvalidArgumentError, InvalidStateError
from .escaping import escape_like_pattern, escape_string_literal, quote_identifier
from .models import TableDefinition
from .names import TableName
from .streaming import iter_text_matches

logger = logging.getLogger(__name__)


class DialectAdapter(ABC):
    """
    Base class for one database engine family.

    Subclasses must implement:
      _connect              — open the driver connection
      list_tables           — enumerate base tables
      get_table_definition  — primary-key and text columns of one table
      is_text_type          — the engine's "is this textual" predicate

    and set:
      name                  — registry name ("sqlite", "postgresql", …)
      required_parts        — TableName accessors this engine needs
    """

    name = None
    required_parts = ("table",)

    # LIKE escaping. Oracle narrows the metacharacters.
    escape_char = "\\"
    like_metacharacters = "%_["

    def __init__(self, connection_string: str, **options):
        if connection_string is None:
            raise InvalidArgumentError(f"{type(self).__name__} requires a connection string")
        self.connection_string = connection_string
        self.options = options
        self._closed = False
        try:
            self.connection = self._connect(connection_string)
        except DatabaseConnectionError:
            raise
        except Exception as e:
            raise DatabaseConnectionError(f"{self.name} connection failed: {e}") from e
        logger.info("opened %r", self)

    # ── Required ──────────────────────────────────────────────

    @abstractmethod
    def _connect(self, connection_string: str):
        """Open and return a DB-API connection. Import the driver here."""
        ...

    @abstractmethod
    def list_tables(self):
        """
        Yield a TableName for every base table (no views, no system catalogs).

        Lazy and single-pass. Materialize with list() before calling any
        other method on this adapter — most transports cannot hold two
        open result sets on one connection.
        """
        ...

    @abstractmethod
    def get_table_definition(self, name: TableName) -> TableDefinition:
        """Read the table's columns from the catalog and classify them."""
        ...

    @abstractmethod
    def is_text_type(self, type_name: str) -> bool:
        """True when a column of this declared type should be searched."""
        ...

    # ── Search ────────────────────────────────────────────────

    def get_substring_matches(self, table_def: TableDefinition, substring: str):
        """
        Iterate over every (row, text column) whose value contains `substring`.

        Validation happens immediately; rows are fetched lazily. A table
        with no text columns yields nothing and issues no query.
        """
        self._check_open()
        if not isinstance(table_def, TableDefinition):
            raise InvalidArgumentError(f"expected a TableDefinition, got {table_def!r}")
        if substring is None:
            raise InvalidArgumentError("substring must not be None")
        self.check_name(table_def.name)

        if not table_def.text_columns:
            return iter(())

        query = self.build_search_query(table_def, substring)
        return iter_text_matches(self.connection_for(table_def.name), table_def,
                                 query, substring)

    def build_search_query(self, table_def: TableDefinition, substring: str) -> str:
        """SELECT <pk ∪ text columns> FROM <table> WHERE <text col LIKE …> OR …"""
        columns = ", ".join(self.select_expression(c) for c in table_def.pertinent_columns())
        criteria = " OR ".join(self.like_condition(c, substring) for c in table_def.text_columns)
        return (
            f"SELECT {columns} "
            f"FROM {self.qualified_name(table_def.name)} "
            f"WHERE {criteria}"
        )

    # ── Dialect helpers ───────────────────────────────────────
    # Override in subclasses where SQL syntax diverges.

    def quote_identifier(self, identifier: str) -> str:
        return quote_identifier(identifier, '"')

    def string_literal(self, value: str) -> str:
        return f"'{escape_string_literal(value)}'"

    def select_expression(self, column: str) -> str:
        """How one column appears in the SELECT list."""
        return self.quote_identifier(column)

    def qualified_name(self, name: TableName) -> str:
        """Quoted FROM target built from required_parts."""
        return ".".join(self.quote_identifier(getattr(name, part))
                        for part in self.required_parts)

    def like_condition(self, column: str, substring: str) -> str:
        pattern = escape_like_pattern(substring, self.escape_char, self.like_metacharacters)
        return (
            f"{self.quote_identifier(column)} LIKE {self.string_literal('%' + pattern + '%')} "
            f"ESCAPE {self.string_literal(self.escape_char)}"
        )

    def connection_for(self, name: TableName):
        """Connection that can see `name`. Only cross-database modes differ."""
        return self.connection

    # ── Plumbing ──────────────────────────────────────────────

    def check_name(self, name: TableName):
        """Raise InvalidArgumentError unless every required part is present."""
        if not isinstance(name, TableName):
            raise InvalidArgumentError(f"expected a TableName, got {name!r}")
        for part in self.required_parts:
            if getattr(name, part) is None:
                raise InvalidArgumentError(
                    f"{part} must not be None for {self.name} tables (got {name.kind.name} name)"
                )

    def _check_open(self):
        if self._closed:
            raise InvalidStateError(f"{self!r} is closed")

    def _rows(self, sql, params=None, connection=None):
        """
        Run a catalog query and yield its rows one by one.

        The cursor is closed when the generator is exhausted or closed.
        """
        self._check_open()
        conn = connection or self.connection
        logger.debug("%s catalog query: %s %r", self.name, " ".join(sql.split()), params)
        cursor = conn.cursor()
        try:
            if params is None:
                cursor.execute(sql)
            else:
                cursor.execute(sql, params)
            while True:
                row = cursor.fetchone()
                if row is None:
                    break
                yield row
        finally:
            cursor.close()

    def _extra_connections(self):
        """Connections besides self.connection that close() must release."""
        return ()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self):
        """
        Release the connection(s). Idempotent.

        Every connection gets a close() call even when an earlier one
        fails; the first failure is re-raised afterwards.
        """
        if self._closed:
            return
        self._closed = True
        first_error = None
        for conn in self._extra_connections():
            try:
                conn.close()
            except Exception as e:
                logger.warning("closing extra connection of %r failed: %s", self, e)
                if first_error is None:
                    first_error = e
        try:
            self.connection.close()
        finally:
            logger.info("closed %r", self)
        if first_error is not None:
            raise first_error

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # ── Repr ──────────────────────────────────────────────────

    def __repr__(self):
        return f"<{self.__class__.__name__}>"
