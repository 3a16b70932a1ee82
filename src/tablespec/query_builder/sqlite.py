"""SQLite query builder implementation."""

from tablespec.constants.sql import QueryType
from tablespec.operations import (
    CreateTable,
    Delete,
    DropTable,
    Insert,
    ListTables,
    Select,
    TableInfo,
)
from tablespec.query_builder import clauses
from tablespec.query_builder.base import BaseQueryBuilder
from tablespec.query_builder.clauses import StatementParts
from tablespec.types.statement import RenderedStatement


class SQLiteQueryBuilder(BaseQueryBuilder):
    """Query builder for SQLite.

    Output templates:
        CREATE TABLE [IF NOT EXISTS ]t (<columns><constraints>)
        DROP TABLE [IF EXISTS ]t
        INSERT INTO t(a,b) VALUES (?,?)    / REPLACE INTO ... when replacing
        SELECT a,b FROM t[ WHERE (c1) AND (c2)][ ORDER BY o1, o2]
        DELETE FROM t[ WHERE (c1) AND (c2)]
    """

    def _build_create_table(self, operation: CreateTable) -> RenderedStatement:
        schema = operation.table_schema
        parts = StatementParts().keyword("CREATE TABLE ")
        if operation.if_not_exists:
            parts.keyword("IF NOT EXISTS ")
        parts.table(operation.table_name)
        parts.keyword(" (")
        parts.add(clauses.column_definitions(schema.columns))
        parts.add(clauses.constraint_list(schema.constraints))
        parts.keyword(")")
        return self._statement(QueryType.CREATE_TABLE, parts)

    def _build_drop_table(self, operation: DropTable) -> RenderedStatement:
        parts = StatementParts().keyword("DROP TABLE ")
        if operation.if_exists:
            parts.keyword("IF EXISTS ")
        parts.table(operation.table_name)
        return self._statement(QueryType.DROP_TABLE, parts)

    def _build_insert(self, operation: Insert) -> RenderedStatement:
        """Build the INSERT template.

        ``replace_on_conflict=True`` selects ``REPLACE INTO``; otherwise the
        verb is ``INSERT INTO``. The rows are validated against the column
        count and travel as parameter sets, never inside the text.
        """
        column_names = self.resolve_insert_columns(operation)
        clauses.check_row_arity(operation.rows, len(column_names), operation.table_name)

        verb = "REPLACE INTO " if operation.replace_on_conflict else "INSERT INTO "
        parts = StatementParts().keyword(verb).table(operation.table_name)
        parts.keyword("(")
        parts.add(clauses.column_list(column_names))
        parts.keyword(") VALUES ")
        parts.add(clauses.placeholders(len(column_names)))
        return self._statement(
            QueryType.INSERT,
            parts,
            parameter_slots=column_names,
            parameter_sets=operation.rows,
        )

    def _build_select(self, operation: Select) -> RenderedStatement:
        parts = StatementParts().keyword("SELECT ")
        parts.add(clauses.column_list(operation.column_names))
        parts.keyword(" FROM ").table(operation.table_name)
        parts.add(clauses.where(operation.conditions))
        parts.add(clauses.order_by(operation.order_by))
        return self._statement(QueryType.SELECT, parts)

    def _build_delete(self, operation: Delete) -> RenderedStatement:
        parts = StatementParts().keyword("DELETE FROM ").table(operation.table_name)
        parts.add(clauses.where(operation.conditions))
        return self._statement(QueryType.DELETE, parts)

    def _build_list_tables(self, operation: ListTables) -> RenderedStatement:
        parts = StatementParts().keyword("SELECT name FROM ").table(operation.table_name)
        parts.add(clauses.where(["type='table'"]))
        return self._statement(QueryType.LIST_TABLES, parts)

    def _build_table_info(self, operation: TableInfo) -> RenderedStatement:
        parts = StatementParts().keyword("PRAGMA table_info(").table(operation.table_name).keyword(")")
        return self._statement(QueryType.TABLE_INFO, parts)
