import pytest

from conftest import FakeConnection
from dbsearchtext.errors import InvalidStateError
from dbsearchtext.models import TableDefinition, TextMatch
from dbsearchtext.names import TableName
from dbsearchtext.streaming import as_string, iter_text_matches

TDEF = TableDefinition(TableName.of_table("notes"), ["id"], ["body", "title"])


def _conn(rows):
    return FakeConnection([("SELECT", ["body", "id", "title"], rows)])


def test_emits_one_match_per_matching_text_column():
    conn = _conn([
        ("red fox", 1, "fox tales"),
        ("blue", 2, "green"),
    ])

    matches = list(iter_text_matches(conn, TDEF, "SELECT …", "fox"))

    assert matches == [
        TextMatch({"id": "1"}, "body", "red fox"),
        TextMatch({"id": "1"}, "title", "fox tales"),
    ]


def test_recheck_is_case_sensitive():
    # the server's LIKE may have matched case-insensitively
    conn = _conn([("FOX", 1, "Fox")])

    assert list(iter_text_matches(conn, TDEF, "SELECT …", "fox")) == []


def test_null_text_value_is_skipped():
    conn = _conn([(None, 1, "fox")])

    matches = list(iter_text_matches(conn, TDEF, "SELECT …", "fox"))

    assert [m.column_name for m in matches] == ["title"]


def test_null_primary_key_fails_loudly():
    conn = _conn([("fox", None, "x")])

    with pytest.raises(InvalidStateError, match="id"):
        list(iter_text_matches(conn, TDEF, "SELECT …", "fox"))


def test_missing_selected_column_fails():
    conn = FakeConnection([("SELECT", ["id", "body"], [(1, "fox")])])

    with pytest.raises(InvalidStateError, match="title"):
        list(iter_text_matches(conn, TDEF, "SELECT …", "fox"))


def test_lazy_and_closes_cursor():
    conn = _conn([("fox", 1, None), ("fox", 2, None)])

    gen = iter_text_matches(conn, TDEF, "SELECT …", "fox")
    assert conn.executed == []

    first = next(gen)
    assert first.primary_key == {"id": "1"}
    assert len(conn.open_cursors) == 1

    gen.close()
    assert conn.open_cursors == []


def test_as_string():
    assert as_string(b"caf\xc3\xa9") == "café"
    assert as_string(42) == "42"
    assert as_string("x") == "x"


def test_as_string_replaces_undecodable_bytes():
    assert as_string(b"\xff") == "\ufffd"
