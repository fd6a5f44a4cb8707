from __future__ import annotations

import sqlite3

import pytest


class FakeCursor:
    """Just enough DB-API cursor: execute / description / fetchone / close."""

    def __init__(self, conn):
        self.conn = conn
        self.description = None
        self._rows = []
        self.closed = False

    def execute(self, sql, params=None):
        self.conn.executed.append((sql, params))
        for needle, columns, rows in self.conn.rules:
            if needle in sql:
                if isinstance(rows, Exception):
                    raise rows
                self.description = [(c, None, None, None, None, None, None) for c in columns]
                self._rows = list(rows)
                return
        self.description = []
        self._rows = []

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None

    def close(self):
        self.closed = True
        self.conn.open_cursors.remove(self)


class FakeConnection:
    """
    DB-API connection stub.

    rules: (needle, column_names, rows) — the first rule whose needle
    occurs in the SQL text answers the statement. If rows is an
    exception instance, execute() raises it.
    """

    def __init__(self, rules=()):
        self.rules = list(rules)
        self.executed = []
        self.open_cursors = []
        self.close_calls = 0

    def cursor(self):
        cur = FakeCursor(self)
        self.open_cursors.append(cur)
        return cur

    def close(self):
        self.close_calls += 1

    @property
    def statements(self):
        return [sql for sql, _ in self.executed]


def make_adapter(adapter_cls, conn, connection_string="fake", **options):
    """Instantiate adapter_cls with _connect() returning `conn` (or conn(dsn) if callable)."""

    def _connect(self, dsn):
        return conn(dsn) if callable(conn) else conn

    fake_cls = type(f"Fake{adapter_cls.__name__}", (adapter_cls,), {"_connect": _connect})
    return fake_cls(connection_string, **options)


@pytest.fixture
def people_db(tmp_path):
    """SQLite file with people(id INTEGER PRIMARY KEY, name TEXT, bio TEXT) and one row."""
    path = tmp_path / "people.db"
    conn = sqlite3.connect(path)
    conn.execute("CREATE TABLE people (id INTEGER PRIMARY KEY, name TEXT, bio TEXT)")
    conn.execute("INSERT INTO people VALUES (1, 'Ada', 'loves gears')")
    conn.commit()
    conn.close()
    return path
