from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from tablespec.common.exceptions import UnknownColumnError
from tablespec.constants.sql import QueryType
from tablespec.logging import get_logger
from tablespec.operations import (
    BaseOperation,
    CreateTable,
    Delete,
    DropTable,
    Insert,
    ListTables,
    Select,
    TableInfo,
)
from tablespec.protocols import ColumnIntrospector
from tablespec.query_builder.clauses import StatementParts
from tablespec.types.statement import RenderedStatement

logger = get_logger(__name__)


class BaseQueryBuilder(ABC):
    """Base interface for statement renderers.

    Query builders turn operations into ``RenderedStatement`` objects. They
    do NOT execute statements; that responsibility belongs to the engine.

    Every build method is pure: identical operations always render to equal
    statements and a failure never yields a partial statement.

    Identifiers and condition/ordering/constraint fragments are embedded
    verbatim. No identifier quoting or injection defense is applied, so
    callers must not pass untrusted fragments.
    """

    def __init__(self, introspector: Optional[ColumnIntrospector] = None):
        """Initialize the query builder.

        Args:
            introspector: Source of table columns for inserts that omit
                their target columns. Optional; without it such inserts
                fail with ``UnknownColumnError``.
        """
        self.introspector = introspector

    @abstractmethod
    def _build_create_table(self, operation: CreateTable) -> RenderedStatement:
        """Build CREATE TABLE statement."""
        pass

    @abstractmethod
    def _build_drop_table(self, operation: DropTable) -> RenderedStatement:
        """Build DROP TABLE statement."""
        pass

    @abstractmethod
    def _build_insert(self, operation: Insert) -> RenderedStatement:
        """Build INSERT or REPLACE statement template plus its rows."""
        pass

    @abstractmethod
    def _build_select(self, operation: Select) -> RenderedStatement:
        """Build SELECT statement."""
        pass

    @abstractmethod
    def _build_delete(self, operation: Delete) -> RenderedStatement:
        """Build DELETE statement."""
        pass

    @abstractmethod
    def _build_list_tables(self, operation: ListTables) -> RenderedStatement:
        """Build the catalog query listing all tables."""
        pass

    @abstractmethod
    def _build_table_info(self, operation: TableInfo) -> RenderedStatement:
        """Build the catalog query describing one table's columns."""
        pass

    def build_query(self, operation: BaseOperation) -> RenderedStatement:
        """Build a rendered statement from an operation.

        Args:
            operation: Operation to convert to SQL

        Returns:
            Rendered statement text with its parameter slots

        Raises:
            NotImplementedError: If operation type is not supported
        """
        operation_mapping = {
            QueryType.CREATE_TABLE: self._build_create_table,
            QueryType.DROP_TABLE: self._build_drop_table,
            QueryType.INSERT: self._build_insert,
            QueryType.SELECT: self._build_select,
            QueryType.DELETE: self._build_delete,
            QueryType.LIST_TABLES: self._build_list_tables,
            QueryType.TABLE_INFO: self._build_table_info,
        }

        builder_method = operation_mapping.get(QueryType(operation.operation_type))
        if builder_method is None:
            raise NotImplementedError(
                f"Operation type {operation.operation_type} not supported by {self.__class__.__name__}"
            )

        statement = builder_method(operation)
        logger.debug(
            f"Rendered {QueryType(statement.query_type).value} statement: {statement.text}",
            extra=operation.observability_attributes(),
        )
        return statement

    def resolve_insert_columns(self, operation: Insert) -> List[str]:
        """Target columns of an insert, introspected when not given.

        Raises:
            UnknownColumnError: If no introspector is configured, if
                introspection fails, or if the table has no columns
        """
        if operation.column_names is not None:
            return list(operation.column_names)

        table_name = operation.table_name
        if self.introspector is None:
            raise UnknownColumnError(table_name, "no column names given and no introspector configured")

        try:
            descriptors = self.introspector.introspect_columns(table_name)
        except Exception as e:
            raise UnknownColumnError(table_name, f"introspection failed: {e}", cause=e) from e

        if not descriptors:
            raise UnknownColumnError(table_name, "table does not exist or has no columns")

        ordered = sorted(descriptors, key=lambda descriptor: descriptor.cid)
        return [descriptor.name for descriptor in ordered]

    @staticmethod
    def _statement(
        query_type: QueryType,
        parts: StatementParts,
        parameter_slots: Sequence[str] = (),
        parameter_sets: Sequence[Sequence[Any]] = (),
    ) -> RenderedStatement:
        return RenderedStatement(
            query_type=query_type,
            text=parts.render(),
            parameter_slots=tuple(parameter_slots),
            parameter_sets=tuple(tuple(row) for row in parameter_sets),
        )
