"""Clause composition for statement rendering.

Every clause rule produces a typed ``ClauseFragment``. Query builders collect
fragments in a ``StatementParts`` and call ``render()``, which is the only
place where statement text is joined together.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Sequence

from tablespec.common.exceptions import ArityMismatchError, InvalidArityError
from tablespec.constants import PLACEHOLDER
from tablespec.schema.column import ColumnSpec, quote_literal


class ClauseKind(str, Enum):
    """Role of a fragment inside a statement."""

    KEYWORD = "keyword"
    TABLE = "table"
    COLUMN_LIST = "column_list"
    COLUMN_DEFINITIONS = "column_definitions"
    CONSTRAINTS = "constraints"
    PLACEHOLDERS = "placeholders"
    WHERE = "where"
    ORDER_BY = "order_by"


@dataclass(frozen=True)
class ClauseFragment:
    """Rendered, ready-to-concatenate piece of SQL text."""

    kind: ClauseKind
    text: str

    @property
    def is_empty(self) -> bool:
        return not self.text


@dataclass
class StatementParts:
    """Ordered collection of clause fragments for one statement."""

    fragments: List[ClauseFragment] = field(default_factory=list)

    def add(self, fragment: ClauseFragment) -> "StatementParts":
        self.fragments.append(fragment)
        return self

    def keyword(self, text: str) -> "StatementParts":
        return self.add(ClauseFragment(ClauseKind.KEYWORD, text))

    def table(self, table_name: str) -> "StatementParts":
        return self.add(ClauseFragment(ClauseKind.TABLE, table_name))

    def render(self) -> str:
        return "".join(fragment.text for fragment in self.fragments if not fragment.is_empty)


def column_definition(column: ColumnSpec) -> str:
    """Render one column as ``<name> <type>[ PRIMARY KEY][ NOT NULL][ DEFAULT '<v>']``.

    The modifier order is fixed.
    """
    definition = f"{column.name} {column.column_type.value}"

    if column.primary_key:
        definition += " PRIMARY KEY"

    if column.not_null:
        definition += " NOT NULL"

    default_text = column.default_text
    if default_text is not None:
        definition += f" DEFAULT {quote_literal(default_text)}"

    return definition


def column_definitions(columns: Sequence[ColumnSpec]) -> ClauseFragment:
    """Column definitions for CREATE TABLE, joined with ``", "``."""
    return ClauseFragment(
        ClauseKind.COLUMN_DEFINITIONS,
        ", ".join(column_definition(column) for column in columns),
    )


def constraint_list(constraints: Sequence[str]) -> ClauseFragment:
    """Table constraints, each prefixed with ``", "``; empty when there are none."""
    return ClauseFragment(
        ClauseKind.CONSTRAINTS,
        "".join(f", {constraint}" for constraint in constraints),
    )


def column_list(column_names: Sequence[str]) -> ClauseFragment:
    return ClauseFragment(ClauseKind.COLUMN_LIST, ",".join(column_names))


def placeholders(count: Any) -> ClauseFragment:
    """Exactly ``count`` positional placeholders, e.g. ``(?,?,?)``.

    Raises:
        InvalidArityError: If ``count`` is not a non-negative integer
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise InvalidArityError(count)
    return ClauseFragment(
        ClauseKind.PLACEHOLDERS,
        "(" + ",".join([PLACEHOLDER] * count) + ")",
    )


def where(conditions: Sequence[str]) -> ClauseFragment:
    """AND-combined conditions, each parenthesized; empty when there are none."""
    if not conditions:
        return ClauseFragment(ClauseKind.WHERE, "")
    return ClauseFragment(
        ClauseKind.WHERE,
        " WHERE (" + ") AND (".join(conditions) + ")",
    )


def order_by(terms: Sequence[str]) -> ClauseFragment:
    """ORDER BY terms in priority order; empty when there are none."""
    if not terms:
        return ClauseFragment(ClauseKind.ORDER_BY, "")
    return ClauseFragment(ClauseKind.ORDER_BY, " ORDER BY " + ", ".join(terms))


def check_row_arity(
    rows: Sequence[Sequence[Any]],
    width: int,
    table_name: Optional[str] = None,
) -> None:
    """Ensure every row of an insert batch has exactly ``width`` values.

    Raises:
        ArityMismatchError: On the first row with a different width
    """
    target = f" for table '{table_name}'" if table_name else ""
    for index, row in enumerate(rows):
        if len(row) != width:
            raise ArityMismatchError(
                f"Row {index}{target} has {len(row)} values but {width} columns are specified",
                expected=width,
                actual=len(row),
                details={"row": index, "table": table_name},
            )
