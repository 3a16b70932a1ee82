"""Execution collaborator protocol definitions.

The query builder never talks to a database. These protocols describe the
engine side of the boundary: something that runs rendered statements with
bound parameters and can report the columns of an existing table.
"""

from typing import Any, Dict, List, Protocol, Sequence, runtime_checkable

from tablespec.schema.column import ColumnDescriptor

Row = Dict[str, Any]


@runtime_checkable
class ColumnIntrospector(Protocol):
    """Reports the column layout of an existing table.

    This is all the query builder needs when an insert omits its target
    columns.
    """

    def introspect_columns(self, table_name: str) -> List[ColumnDescriptor]:
        """Return the table's columns in declaration order.

        An empty list means the table does not exist.
        """
        ...


@runtime_checkable
class ExecutionCollaborator(ColumnIntrospector, Protocol):
    """Runs rendered statements against a concrete SQL engine."""

    def execute(self, statement: str, parameters: Sequence[Any] = ()) -> List[Row]:
        """Execute one statement with positional parameters.

        Returns:
            Result rows as dictionaries keyed by column name (empty for
            statements that return no rows)
        """
        ...

    def execute_many(self, statement: str, parameter_sets: Sequence[Sequence[Any]]) -> int:
        """Execute one statement once per parameter set.

        Returns:
            Number of rows affected
        """
        ...
