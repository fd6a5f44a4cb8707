"""
SQLite adapter — Python's built-in sqlite3 module.

Connection string is a file path, a sqlite:/// URL, a file: URI, or
":memory:". Plain paths are opened read-write WITHOUT create, so a typo
fails loudly instead of searching a fresh empty database.

Names are table-only; SQLite has no schemas worth enumerating
(attached databases are out of scope).
"""

import sqlite3
from pathlib import Path

from .base import DialectAdapter
from .escaping import escape_string_literal
from .models import TableDefinition
from .names import TableName


def _decode_text(raw):
    return raw.decode("utf-8", "replace")


class SQLiteAdapter(DialectAdapter):
    """SQLite via sqlite3."""

    name = "sqlite"
    required_parts = ("table",)

    def _connect(self, connection_string):
        target = connection_string
        if "://" in target and target.split("://", 1)[0].lower() == "sqlite":
            # sqlite:///absolute/path or sqlite://relative/path
            target = target.split("://", 1)[1]

        if target == ":memory:":
            conn = sqlite3.connect(target)
        elif target.startswith("file:"):
            conn = sqlite3.connect(target, uri=True)
        else:
            uri = Path(target).expanduser().resolve().as_uri() + "?mode=rw"
            conn = sqlite3.connect(uri, uri=True)
        # TEXT values are not guaranteed to be valid UTF-8
        conn.text_factory = _decode_text
        return conn

    # ── Interface ─────────────────────────────────────────────

    def list_tables(self):
        for (name,) in self._rows(
            "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
        ):
            yield TableName.of_table(name)

    def get_table_definition(self, name):
        self.check_name(name)

        pk_columns = []
        text_columns = []
        # PRAGMA takes no bind parameters; the name goes in as a literal
        pragma = f"PRAGMA table_info('{escape_string_literal(name.table)}')"
        # cid, name, type, notnull, dflt_value, pk
        for _cid, column, type_name, _notnull, _default, pk in self._rows(pragma):
            if pk:
                pk_columns.append(column)
            if self.is_text_type(type_name or ""):
                text_columns.append(column)

        return TableDefinition(name, pk_columns, text_columns)

    def is_text_type(self, type_name):
        """
        SQLite's column-affinity rules (Datatypes In SQLite, §3.1), first match wins:

          1. contains INT                → INTEGER
          2. contains CHAR, CLOB or TEXT → TEXT
          3-5. BLOB / REAL / NUMERIC     → not text

        Rule 1 must run first: "VARCHARINT" has INTEGER affinity.
        """
        upper = type_name.upper()
        if "INT" in upper:
            return False
        return "CHAR" in upper or "CLOB" in upper or "TEXT" in upper

    def __repr__(self):
        return f"<SQLiteAdapter {self.connection_string}>"
