import pytest

from dbsearchtext.errors import InvalidArgumentError
from dbsearchtext.names import NameKind, TableName


def test_table_only_name_has_no_database_or_schema():
    name = TableName.of_table("people")

    assert name.table == "people"
    assert name.schema is None
    assert name.database is None
    assert name.components == ("people",)


def test_accessors_follow_the_variant():
    st = TableName.of_schema_table("public", "orders")
    dt = TableName.of_database_table("shop", "orders")
    dst = TableName.of_database_schema_table("shop", "dbo", "orders")

    assert (st.database, st.schema, st.table) == (None, "public", "orders")
    assert (dt.database, dt.schema, dt.table) == ("shop", None, "orders")
    assert (dst.database, dst.schema, dst.table) == ("shop", "dbo", "orders")


def test_none_component_is_rejected():
    with pytest.raises(InvalidArgumentError, match="schema"):
        TableName.of_schema_table(None, "orders")

    with pytest.raises(InvalidArgumentError):
        TableName.of_table(None)


def test_wrong_arity_is_rejected():
    with pytest.raises(InvalidArgumentError, match="2 component"):
        TableName(NameKind.DATABASE_TABLE, ("only",))


def test_non_string_component_is_rejected():
    with pytest.raises(InvalidArgumentError, match="string"):
        TableName(NameKind.TABLE, (42,))


def test_equality_is_ordinal():
    assert TableName.of_table("É") == TableName.of_table("É")
    assert TableName.of_table("É") != TableName.of_table("é")
    assert TableName.of_table("a") != TableName.of_table("b")


def test_same_components_different_kind_are_not_equal():
    assert TableName.of_schema_table("x", "t") != TableName.of_database_table("x", "t")


def test_hashable_and_deduplicates():
    names = {TableName.of_table("a"), TableName.of_table("a"), TableName.of_table("b")}

    assert len(names) == 2


def test_ordering_is_component_wise_then_length():
    names = [
        TableName.of_schema_table("b", "a"),
        TableName.of_schema_table("a", "z"),
        TableName.of_table("a"),
        TableName.of_schema_table("B", "a"),
    ]

    assert [n.components for n in sorted(names)] == [
        ("B", "a"),
        ("a",),
        ("a", "z"),
        ("b", "a"),
    ]


def test_immutable():
    name = TableName.of_table("t")

    with pytest.raises(AttributeError):
        name.components = ("other",)


def test_dotted():
    assert TableName.of_database_schema_table("d", "s", "t").dotted() == "d.s.t"
