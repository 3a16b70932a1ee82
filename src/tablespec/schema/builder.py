"""Schema builder.

``SchemaBuilder`` accumulates column specs and table-level constraints while
enforcing the structural invariants of a table definition, and produces an
immutable ``Schema`` snapshot for rendering.
"""

from typing import Iterable, List, Optional, Tuple

from pydantic import ConfigDict, Field, model_validator

from tablespec.common.exceptions import (
    DuplicateColumnError,
    DuplicatePrimaryKeyError,
    InvalidConstraintError,
)
from tablespec.logging import get_logger
from tablespec.schema.column import ColumnDescriptor, ColumnSpec
from tablespec.types.base import TablespecBaseModel

logger = get_logger(__name__)


class Schema(TablespecBaseModel):
    """Finalized, read-only description of a table.

    Column order is declaration order and is preserved in generated DDL.

    Attributes:
        columns: Column specs in declaration order
        constraints: Table-level constraint fragments in declaration order
    """
    model_config = ConfigDict(frozen=True)

    columns: Tuple[ColumnSpec, ...] = Field(default_factory=tuple)
    constraints: Tuple[str, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def validate_structure(self):
        # Snapshots built outside SchemaBuilder get the same checks.
        _check_columns(self.columns)
        for constraint in self.constraints:
            _check_constraint(constraint)
        return self

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(column.name for column in self.columns)

    @property
    def primary_key(self) -> Optional[ColumnSpec]:
        for column in self.columns:
            if column.primary_key:
                return column
        return None

    @classmethod
    def from_descriptors(
        cls,
        descriptors: Iterable[ColumnDescriptor],
        constraints: Iterable[str] = (),
    ) -> "Schema":
        """Rebuild a schema from introspected column descriptors.

        A composite primary key cannot be expressed on the columns, so its
        columns are added as plain columns followed by one
        ``PRIMARY KEY(<columns in key order>)`` table constraint.
        """
        ordered = sorted(descriptors, key=lambda d: d.cid)
        key_columns = sorted((d for d in ordered if d.primary_key), key=lambda d: d.primary_key)
        composite_key = len(key_columns) > 1

        builder = SchemaBuilder()
        for descriptor in ordered:
            column = descriptor.to_column_spec()
            if composite_key and column.primary_key:
                column = column.model_copy(update={"primary_key": False})
            builder.add_column(column)

        if composite_key:
            key_names = ", ".join(d.name for d in key_columns)
            builder.add_constraint(f"PRIMARY KEY({key_names})")
        for constraint in constraints:
            builder.add_constraint(constraint)
        return builder.finalize()

    def to_descriptors(self) -> List[ColumnDescriptor]:
        return [column.to_descriptor(cid) for cid, column in enumerate(self.columns)]


class SchemaBuilder:
    """Mutable accumulator for a table definition.

    Columns and constraints can only be appended or cleared wholesale;
    there is no single-item removal. A failed ``add_column`` leaves the
    builder untouched.

    Example:
        >>> builder = SchemaBuilder()
        >>> builder.add_column(ColumnSpec(name="id", type="INTEGER", primary_key=True))
        >>> builder.add_column(ColumnSpec(name="name", type="TEXT", not_null=True))
        >>> builder.add_constraint("UNIQUE(name)")
        >>> schema = builder.finalize()
    """

    def __init__(self):
        self._columns: List[ColumnSpec] = []
        self._constraints: List[str] = []

    @classmethod
    def from_schema(cls, schema: Schema) -> "SchemaBuilder":
        """Seed a builder with the contents of an existing snapshot."""
        builder = cls()
        builder._columns = list(schema.columns)
        builder._constraints = list(schema.constraints)
        return builder

    def add_column(self, spec: ColumnSpec) -> "SchemaBuilder":
        """Append a column.

        Raises:
            DuplicateColumnError: If a column with the same name exists
            DuplicatePrimaryKeyError: If ``spec`` is a primary key and
                another column already holds that role
        """
        _check_can_add(self._columns, spec)
        self._columns.append(spec)
        logger.debug(f"Added column '{spec.name}' ({spec.column_type.value})")
        return self

    def clear_columns(self) -> "SchemaBuilder":
        self._columns = []
        return self

    def add_constraint(self, constraint: str) -> "SchemaBuilder":
        """Append a table-level constraint such as ``UNIQUE(a, b)``.

        The text is not parsed; it is rendered verbatim after the columns.

        Raises:
            InvalidConstraintError: If the constraint text is blank
        """
        _check_constraint(constraint)
        self._constraints.append(constraint)
        return self

    def clear_constraints(self) -> "SchemaBuilder":
        self._constraints = []
        return self

    def column_names(self) -> Tuple[str, ...]:
        return tuple(column.name for column in self._columns)

    def constraints(self) -> Tuple[str, ...]:
        return tuple(self._constraints)

    def finalize(self) -> Schema:
        """Return an immutable snapshot of the current definition."""
        return Schema(columns=tuple(self._columns), constraints=tuple(self._constraints))


def _check_can_add(existing: List[ColumnSpec], spec: ColumnSpec) -> None:
    for column in existing:
        if column.name == spec.name:
            raise DuplicateColumnError(spec.name)

    if spec.primary_key:
        for column in existing:
            if column.primary_key:
                raise DuplicatePrimaryKeyError(spec.name, column.name)


def _check_columns(columns: Iterable[ColumnSpec]) -> None:
    seen: List[ColumnSpec] = []
    for column in columns:
        _check_can_add(seen, column)
        seen.append(column)


def _check_constraint(constraint: str) -> None:
    if not isinstance(constraint, str) or not constraint.strip():
        raise InvalidConstraintError(constraint)
