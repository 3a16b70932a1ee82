"""Data Manipulation Language (DML) operations.

This module contains operation classes for SELECT, INSERT and DELETE.
Conditions are opaque boolean SQL expressions that are always combined with
AND; an OR has to be written inside a single condition, e.g.
``["time < 10 OR count >= 5", "cost < 3"]``.
"""

from typing import Any, List, Literal, Optional, Tuple

from pydantic import Field, field_validator, model_validator

from tablespec.constants.sql import QueryType
from tablespec.operations.base import BaseOperation, as_list, check_fragments


class Select(BaseOperation):
    """Select rows operation.

    Supports:
    - Column lists and expressions (e.g. ``"100*dollars + cents AS total_cents"``)
    - WHERE conditions combined with AND
    - ORDER BY terms in priority order (e.g. ``["time ASC", "count DESC"]``)
    """
    operation_type: Literal[QueryType.SELECT] = Field(
        default=QueryType.SELECT,
        frozen=True
    )
    column_names: List[str] = Field(default_factory=lambda: ["*"])
    conditions: List[str] = Field(default_factory=list)
    order_by: List[str] = Field(default_factory=list)

    @field_validator("column_names", mode="before")
    @classmethod
    def normalize_columns(cls, v: Any) -> List[str]:
        """Empty or missing column lists select every column."""
        return as_list(v) or ["*"]

    @field_validator("conditions", "order_by", mode="before")
    @classmethod
    def normalize_fragments(cls, v: Any) -> List[str]:
        return as_list(v)

    @field_validator("column_names", "conditions", "order_by")
    @classmethod
    def validate_fragments(cls, v: List[str], info) -> List[str]:
        return check_fragments(v, info.field_name)


class Insert(BaseOperation):
    """Insert rows operation.

    One statement template is rendered with one ``?`` per target column;
    every row is bound to the same template.

    Attributes:
        column_names: Target columns. When omitted the query builder reads
            them from the table through its column introspector.
        rows: Values to insert, one tuple per row
        replace_on_conflict: Render ``REPLACE INTO`` instead of ``INSERT INTO``
            so a row conflicting on a unique key overwrites the existing one
    """
    operation_type: Literal[QueryType.INSERT] = Field(
        default=QueryType.INSERT,
        frozen=True
    )
    column_names: Optional[List[str]] = Field(default=None)
    rows: List[Tuple[Any, ...]] = Field(default_factory=list)
    replace_on_conflict: bool = Field(default=False)

    @field_validator("column_names", mode="before")
    @classmethod
    def normalize_columns(cls, v: Any) -> Optional[List[str]]:
        """An empty column list means the columns are inferred."""
        return as_list(v) or None

    @field_validator("column_names")
    @classmethod
    def validate_columns(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return check_fragments(v, "column_names")

    @model_validator(mode="after")
    def validate_row_arity(self):
        """Rows must share one width, equal to the column count when known."""
        from tablespec.query_builder.clauses import check_row_arity

        if self.column_names is not None:
            check_row_arity(self.rows, len(self.column_names), self.table_name)
        elif self.rows:
            check_row_arity(self.rows, len(self.rows[0]), self.table_name)
        return self


class Delete(BaseOperation):
    """Delete rows operation. No conditions deletes every row."""
    operation_type: Literal[QueryType.DELETE] = Field(
        default=QueryType.DELETE,
        frozen=True
    )
    conditions: List[str] = Field(default_factory=list)

    @field_validator("conditions", mode="before")
    @classmethod
    def normalize_conditions(cls, v: Any) -> List[str]:
        return as_list(v)

    @field_validator("conditions")
    @classmethod
    def validate_conditions(cls, v: List[str]) -> List[str]:
        return check_fragments(v, "conditions")
