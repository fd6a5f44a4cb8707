"""
SQL Server adapter — pyodbc.

Connection string is a plain ODBC string, e.g.
  "DRIVER={ODBC Driver 18 for SQL Server};SERVER=db,1433;UID=me;PWD=…;TrustServerCertificate=yes"

Every database in sys.databases is walked; names are
database.schema.table and all catalog queries are three-part
qualified ([db].sys.objects …), so a single connection suffices.

Identifiers are bracket-quoted; only "]" needs doubling inside [...].
String literals are N'…' so non-Latin-1 search text survives.
"""

from .base import DialectAdapter
from .escaping import escape_string_literal, quote_identifier
from .models import TableDefinition
from .names import TableName

_DATABASES_SQL = "SELECT name FROM sys.databases ORDER BY name"

_TABLES_SQL = """
    SELECT s.name AS schema_name, o.name AS table_name
    FROM {db}.sys.objects AS o
        INNER JOIN {db}.sys.schemas AS s ON s.schema_id = o.schema_id
    WHERE o.type = 'U'
    ORDER BY s.name, o.name
"""

_COLUMNS_SQL = """
    SELECT c.name AS column_name, t.name AS type_name,
        CASE WHEN ic.column_id IS NULL THEN 0 ELSE 1 END AS is_primary_key
    FROM {db}.sys.objects AS o
        INNER JOIN {db}.sys.schemas AS s ON s.schema_id = o.schema_id
        INNER JOIN {db}.sys.columns AS c ON c.object_id = o.object_id
        INNER JOIN {db}.sys.types AS t ON t.user_type_id = c.user_type_id
        LEFT OUTER JOIN (
            {db}.sys.indexes AS i
            INNER JOIN {db}.sys.index_columns AS ic
                ON ic.index_id = i.index_id AND ic.object_id = i.object_id
        ) ON i.object_id = o.object_id AND i.is_primary_key = 1 AND ic.column_id = c.column_id
    WHERE s.name = ?
        AND o.name = ?
    ORDER BY c.column_id
"""


class SQLServerAdapter(DialectAdapter):
    """SQL Server via pyodbc."""

    name = "sqlserver"
    required_parts = ("database", "schema", "table")

    def _connect(self, connection_string):
        import pyodbc
        return pyodbc.connect(connection_string, autocommit=True)

    # ── Interface ─────────────────────────────────────────────

    def list_tables(self):
        # one open result set per connection: collect database names first
        databases = [name for (name,) in self._rows(_DATABASES_SQL)]
        for database in databases:
            sql = _TABLES_SQL.format(db=self.quote_identifier(database))
            for schema, table in self._rows(sql):
                yield TableName.of_database_schema_table(database, schema, table)

    def get_table_definition(self, name):
        self.check_name(name)

        pk_columns = []
        text_columns = []
        sql = _COLUMNS_SQL.format(db=self.quote_identifier(name.database))
        for column, type_name, is_pk in self._rows(sql, (name.schema, name.table)):
            if is_pk == 1:
                pk_columns.append(column)
            if self.is_text_type(type_name):
                text_columns.append(column)

        return TableDefinition(name, pk_columns, text_columns)

    def is_text_type(self, type_name):
        return type_name.endswith("char") or type_name.endswith("text")

    # ── Dialect overrides ─────────────────────────────────────

    def quote_identifier(self, identifier):
        return quote_identifier(identifier, "[", "]")

    def string_literal(self, value):
        return f"N'{escape_string_literal(value)}'"

    def __repr__(self):
        # keep PWD=… out of logs
        parts = [p for p in self.connection_string.split(";")
                 if p.split("=", 1)[0].strip().upper() in ("DRIVER", "SERVER", "DATABASE")]
        return f"<SQLServerAdapter {';'.join(parts)}>"
