"""Protocol definitions for the execution boundary."""

from tablespec.protocols.execution import ColumnIntrospector, ExecutionCollaborator, Row

__all__ = [
    "ColumnIntrospector",
    "ExecutionCollaborator",
    "Row",
]
