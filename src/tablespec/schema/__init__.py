"""Table schema model.

Exposes the column model (``ColumnSpec`` for authoring, ``ColumnDescriptor``
for introspection results) and the ``SchemaBuilder`` that assembles them into
an immutable ``Schema``.
"""

from tablespec.schema.column import ColumnDescriptor, ColumnSpec
from tablespec.schema.builder import Schema, SchemaBuilder

__all__ = [
    "ColumnDescriptor",
    "ColumnSpec",
    "Schema",
    "SchemaBuilder",
]
