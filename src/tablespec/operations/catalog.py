"""Catalog operations.

Read-only queries against SQLite's own metadata: the list of tables in the
database and the column layout of one table.
"""

from typing import Literal

from pydantic import Field

from tablespec.constants.sql import QueryType
from tablespec.operations.base import BaseOperation


class ListTables(BaseOperation):
    """List the names of all tables in the database."""
    operation_type: Literal[QueryType.LIST_TABLES] = Field(
        default=QueryType.LIST_TABLES,
        frozen=True
    )
    table_name: str = Field(default="sqlite_master", min_length=1)


class TableInfo(BaseOperation):
    """Describe the columns of a table (name, type, NOT NULL, default, primary key)."""
    operation_type: Literal[QueryType.TABLE_INFO] = Field(
        default=QueryType.TABLE_INFO,
        frozen=True
    )
