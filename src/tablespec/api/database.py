"""High-level database facade.

``Database`` wraps one SQLite file. Every method wraps its arguments in an
operation model, renders it with the query builder and hands the rendered
statement to the engine. The facade never assembles SQL text itself.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from tablespec.common.exceptions import configuration_error
from tablespec.compute import SQLiteEngine
from tablespec.constants.sql import QueryType
from tablespec.logging import get_logger
from tablespec.operations import (
    BaseOperation,
    CreateTable,
    Delete,
    DropTable,
    Insert,
    ListTables,
    OperationBuilder,
    Select,
)
from tablespec.protocols import ExecutionCollaborator, Row
from tablespec.query_builder import get_query_builder
from tablespec.schema import ColumnDescriptor, Schema, SchemaBuilder
from tablespec.types.statement import RenderedStatement

logger = get_logger(__name__)

StringOrList = Optional[Union[str, Sequence[str]]]


class Database:
    """Open (or create) a SQLite database and run table operations on it.

    Example:
        >>> schema = (
        ...     SchemaBuilder()
        ...     .add_column(ColumnSpec(name="id", type="INTEGER", primary_key=True))
        ...     .add_column(ColumnSpec(name="label", type="TEXT", not_null=True))
        ...     .finalize()
        ... )
        >>> with Database("results.db") as db:
        ...     db.create_table("runs", schema, if_not_exists=True)
        ...     db.insert_values("runs", [(1, "baseline"), (2, "tuned")])
        ...     db.select_values("runs", conditions=["id > 1"])
        [{'id': 2, 'label': 'tuned'}]
    """

    def __init__(self, path: Optional[str] = None, engine: Optional[ExecutionCollaborator] = None):
        """Initialize the database.

        Args:
            path: SQLite file to open, or ``:memory:``. Defaults to the
                ``database_path`` setting.
            engine: Execution collaborator to use instead of a new
                ``SQLiteEngine`` for ``path``

        Raises:
            TablespecError: If ``path`` is an empty string
        """
        if path is not None and not path.strip():
            raise configuration_error("Database path cannot be empty", config_key="database_path")

        self.engine = engine if engine is not None else SQLiteEngine(path)
        self._filename = path or getattr(self.engine, "filename", None)

    @property
    def filename(self) -> Optional[str]:
        """File backing this database."""
        return self._filename

    def _render(self, operation: BaseOperation) -> RenderedStatement:
        return get_query_builder(introspector=self.engine).build_query(operation)

    def execute(self, operation: Union[BaseOperation, Dict[str, Any]]) -> Union[List[Row], int]:
        """Render and run an operation model or its ``to_dict()`` form.

        Returns:
            Affected row count for inserts, result rows otherwise
        """
        if isinstance(operation, dict):
            operation = OperationBuilder.create_operation_from_dict(operation)

        statement = self._render(operation)
        logger.debug(
            f"Executing {QueryType(statement.query_type).value} on {operation.table_name}",
            extra=operation.observability_attributes(),
        )
        if statement.query_type == QueryType.INSERT:
            return self.engine.execute_many(statement.text, statement.parameter_sets)
        return self.engine.execute(statement.text)

    def list_tables(self) -> List[str]:
        """Names of all tables in the database."""
        rows = self.execute(ListTables())
        return [row["name"] for row in rows]

    def create_table(
        self,
        table_name: str,
        schema: Union[Schema, SchemaBuilder],
        if_not_exists: bool = False,
    ) -> None:
        """Create a table from a finalized schema (or a builder, finalized here)."""
        if isinstance(schema, SchemaBuilder):
            schema = schema.finalize()
        self.execute(CreateTable(table_name=table_name, table_schema=schema, if_not_exists=if_not_exists))
        logger.info(f"Created table {table_name}")

    def get_table_columns(self, table_name: str) -> List[ColumnDescriptor]:
        """Column layout of a table; empty when the table does not exist."""
        return self.engine.introspect_columns(table_name)

    def get_table_schema(self, table_name: str) -> Schema:
        """Rebuild the schema of an existing table from its column layout.

        A composite primary key comes back as a ``PRIMARY KEY(...)`` table
        constraint. Other table-level constraints are not reported by
        introspection and are absent from the result.
        """
        return Schema.from_descriptors(self.get_table_columns(table_name))

    def drop_table(self, table_name: str, if_exists: bool = False) -> None:
        self.execute(DropTable(table_name=table_name, if_exists=if_exists))
        logger.info(f"Dropped table {table_name}")

    def insert_values(
        self,
        table_name: str,
        values: Sequence[Sequence[Any]],
        column_names: StringOrList = None,
        replace: bool = False,
    ) -> int:
        """Insert rows into a table.

        Args:
            table_name: Target table
            values: Rows to insert, one sequence of values per row
            column_names: Target columns. When omitted, every column of the
                table is targeted in declaration order.
            replace: Use ``REPLACE INTO`` so conflicting rows are overwritten

        Returns:
            Number of rows written

        Raises:
            ArityMismatchError: If a row's width differs from the column count
            UnknownColumnError: If columns are omitted and the table is unknown
        """
        operation = Insert(
            table_name=table_name,
            column_names=column_names,
            rows=[tuple(row) for row in values],
            replace_on_conflict=replace,
        )
        return self.execute(operation)

    def delete_values(self, table_name: str, conditions: StringOrList = None) -> None:
        """Delete the rows matching all ``conditions``; every row when there are none."""
        self.execute(Delete(table_name=table_name, conditions=conditions))

    def select_values(
        self,
        table_name: str,
        column_names: StringOrList = "*",
        conditions: StringOrList = None,
        order_by: StringOrList = None,
    ) -> List[Row]:
        """Select rows matching all ``conditions``, sorted by ``order_by`` terms.

        Column names may be expressions, e.g. ``"100*dollars + cents AS total_cents"``.
        """
        operation = Select(
            table_name=table_name,
            column_names=column_names,
            conditions=conditions,
            order_by=order_by,
        )
        return self.execute(operation)

    def close(self) -> None:
        dispose = getattr(self.engine, "dispose", None)
        if dispose is not None:
            dispose()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
