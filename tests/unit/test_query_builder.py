"""Unit tests for the SQLite query builder."""

from unittest.mock import Mock

import pytest

from tablespec.common.exceptions import ArityMismatchError, UnknownColumnError
from tablespec.constants import QueryType
from tablespec.operations import (
    CreateTable,
    Delete,
    DropTable,
    Insert,
    ListTables,
    Select,
    TableInfo,
)
from tablespec.query_builder import QueryBuilderFactory, SQLiteQueryBuilder, get_query_builder
from tablespec.schema import ColumnDescriptor, ColumnSpec, SchemaBuilder


@pytest.fixture
def builder():
    return SQLiteQueryBuilder()


def _introspector(*names):
    introspector = Mock()
    introspector.introspect_columns.return_value = [
        ColumnDescriptor(cid=cid, name=name, type="TEXT") for cid, name in enumerate(names)
    ]
    return introspector


class TestCreateTable:
    """Test CREATE TABLE rendering."""

    def test_columns_in_declaration_order(self, builder, people_schema):
        statement = builder.build_query(CreateTable(table_name="people", table_schema=people_schema))

        assert statement.text == (
            "CREATE TABLE people (id INTEGER PRIMARY KEY, name TEXT NOT NULL, age INTEGER DEFAULT '0')"
        )
        assert QueryType(statement.query_type) is QueryType.CREATE_TABLE

    def test_column_count_matches_schema(self, builder):
        schema_builder = SchemaBuilder()
        for index in range(5):
            schema_builder.add_column(ColumnSpec(name=f"c{index}", type="REAL"))

        statement = builder.build_query(CreateTable(table_name="t", table_schema=schema_builder.finalize()))

        inner = statement.text[len("CREATE TABLE t ("):-1]
        assert inner.split(", ") == [f"c{index} REAL" for index in range(5)]

    def test_if_not_exists_and_constraints(self, builder):
        schema = (
            SchemaBuilder()
            .add_column(ColumnSpec(name="a", type="INTEGER"))
            .add_column(ColumnSpec(name="b", type="TEXT"))
            .add_constraint("UNIQUE(a, b)")
            .finalize()
        )

        statement = builder.build_query(CreateTable(table_name="t", table_schema=schema, if_not_exists=True))

        assert statement.text == "CREATE TABLE IF NOT EXISTS t (a INTEGER, b TEXT, UNIQUE(a, b))"


class TestDropTable:

    def test_drop(self, builder):
        assert builder.build_query(DropTable(table_name="t")).text == "DROP TABLE t"

    def test_drop_if_exists(self, builder):
        assert builder.build_query(DropTable(table_name="t", if_exists=True)).text == "DROP TABLE IF EXISTS t"


class TestInsert:
    """Test INSERT / REPLACE rendering."""

    def test_insert_template(self, builder):
        statement = builder.build_query(Insert(table_name="t", column_names=["a", "b"]))

        assert statement.text == "INSERT INTO t(a,b) VALUES (?,?)"
        assert statement.parameter_slots == ("a", "b")
        assert statement.parameter_sets == ()

    def test_replace_on_conflict(self, builder):
        statement = builder.build_query(
            Insert(table_name="t", column_names=["a", "b"], replace_on_conflict=True)
        )

        assert statement.text == "REPLACE INTO t(a,b) VALUES (?,?)"

    def test_rows_travel_as_parameter_sets(self, builder):
        statement = builder.build_query(
            Insert(table_name="t", column_names=["a", "b"], rows=[(1, "x"), (2, "o'k")])
        )

        assert statement.parameter_sets == ((1, "x"), (2, "o'k"))
        assert "o'k" not in statement.text
        assert statement.is_batch

    def test_single_string_column(self, builder):
        statement = builder.build_query(Insert(table_name="t", column_names="a", rows=[(1,)]))
        assert statement.text == "INSERT INTO t(a) VALUES (?)"

    def test_columns_introspected_when_omitted(self):
        introspector = _introspector("x", "y", "z")
        builder = SQLiteQueryBuilder(introspector)

        statement = builder.build_query(Insert(table_name="t", rows=[(1, 2, 3)]))

        introspector.introspect_columns.assert_called_once_with("t")
        assert statement.text == "INSERT INTO t(x,y,z) VALUES (?,?,?)"

    def test_introspected_columns_sorted_by_cid(self):
        introspector = Mock()
        introspector.introspect_columns.return_value = [
            ColumnDescriptor(cid=1, name="second"),
            ColumnDescriptor(cid=0, name="first"),
        ]

        statement = SQLiteQueryBuilder(introspector).build_query(Insert(table_name="t"))

        assert statement.parameter_slots == ("first", "second")

    def test_empty_column_list_means_introspect(self):
        introspector = _introspector("a")

        SQLiteQueryBuilder(introspector).build_query(Insert(table_name="t", column_names=[]))

        introspector.introspect_columns.assert_called_once_with("t")

    def test_row_width_checked_against_introspected_columns(self):
        builder = SQLiteQueryBuilder(_introspector("x", "y"))

        with pytest.raises(ArityMismatchError) as exc_info:
            builder.build_query(Insert(table_name="t", rows=[(1, 2, 3)]))

        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 3

    def test_no_introspector(self, builder):
        with pytest.raises(UnknownColumnError, match="no introspector"):
            builder.build_query(Insert(table_name="t", rows=[(1,)]))

    def test_missing_table(self):
        builder = SQLiteQueryBuilder(_introspector())

        with pytest.raises(UnknownColumnError, match="does not exist"):
            builder.build_query(Insert(table_name="missing"))

    def test_introspection_failure_wrapped(self):
        introspector = Mock()
        failure = RuntimeError("disk I/O error")
        introspector.introspect_columns.side_effect = failure

        with pytest.raises(UnknownColumnError) as exc_info:
            SQLiteQueryBuilder(introspector).build_query(Insert(table_name="t"))

        assert exc_info.value.cause is failure
        assert exc_info.value.table_name == "t"


class TestSelect:
    """Test SELECT rendering."""

    def test_star(self, builder):
        assert builder.build_query(Select(table_name="t", column_names=["*"])).text == "SELECT * FROM t"

    def test_default_columns(self, builder):
        assert builder.build_query(Select(table_name="t")).text == "SELECT * FROM t"

    def test_condition_and_ordering(self, builder):
        operation = Select(table_name="t", column_names=["c"], conditions=["x>2"], order_by=["y DESC"])

        assert builder.build_query(operation).text == "SELECT c FROM t WHERE (x>2) ORDER BY y DESC"

    def test_multiple_conditions(self, builder):
        operation = Select(table_name="t", column_names=["c"], conditions=["a<1", "b>=5"])

        assert builder.build_query(operation).text == "SELECT c FROM t WHERE (a<1) AND (b>=5)"

    def test_multiple_columns_and_expressions(self, builder):
        operation = Select(table_name="t", column_names=["a", "100*dollars + cents AS total_cents"])

        assert builder.build_query(operation).text == "SELECT a,100*dollars + cents AS total_cents FROM t"

    def test_rendering_is_deterministic(self, builder):
        operation = Select(table_name="t", column_names=["c"], conditions=["x>2"], order_by=["y DESC"])

        assert builder.build_query(operation) == builder.build_query(operation)
        assert SQLiteQueryBuilder().build_query(operation) == builder.build_query(operation)


class TestDeleteAndCatalog:

    def test_delete_all(self, builder):
        assert builder.build_query(Delete(table_name="t")).text == "DELETE FROM t"

    def test_delete_with_conditions(self, builder):
        operation = Delete(table_name="t", conditions=["a = 1", "b IS NULL"])
        assert builder.build_query(operation).text == "DELETE FROM t WHERE (a = 1) AND (b IS NULL)"

    def test_list_tables(self, builder):
        assert builder.build_query(ListTables()).text == "SELECT name FROM sqlite_master WHERE (type='table')"

    def test_table_info(self, builder):
        assert builder.build_query(TableInfo(table_name="t")).text == "PRAGMA table_info(t)"


class TestFactory:

    def test_factory_binds_introspector(self):
        introspector = _introspector("a")

        builder = QueryBuilderFactory.create(introspector)

        assert isinstance(builder, SQLiteQueryBuilder)
        assert builder.introspector is introspector

    def test_get_query_builder_default(self):
        assert get_query_builder().introspector is None
