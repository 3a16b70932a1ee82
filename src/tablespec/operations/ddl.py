"""Data Definition Language (DDL) operations.

This module contains operation classes for CREATE TABLE and DROP TABLE.
"""

from typing import Literal

from pydantic import Field, model_validator

from tablespec.constants.sql import QueryType
from tablespec.operations.base import BaseOperation
from tablespec.schema import Schema


class CreateTable(BaseOperation):
    """Create table operation.

    Renders the schema's columns in declaration order followed by its
    table-level constraints.
    """
    operation_type: Literal[QueryType.CREATE_TABLE] = Field(
        default=QueryType.CREATE_TABLE,
        frozen=True
    )
    table_schema: Schema
    if_not_exists: bool = Field(
        default=False,
        description="Render IF NOT EXISTS so creation is skipped when the table exists"
    )

    @model_validator(mode='after')
    def validate_table_definition(self):
        """A table needs at least one column."""
        if not self.table_schema.columns:
            raise ValueError(
                f"CreateTable for '{self.table_name}' requires a schema with at least one column"
            )
        return self


class DropTable(BaseOperation):
    """Drop table operation."""
    operation_type: Literal[QueryType.DROP_TABLE] = Field(
        default=QueryType.DROP_TABLE,
        frozen=True
    )
    if_exists: bool = Field(default=False)
