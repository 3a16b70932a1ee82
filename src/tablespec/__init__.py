
from tablespec.__version__ import __version__

from tablespec.constants import ColumnType, QueryType

from tablespec.schema import (
    ColumnDescriptor,
    ColumnSpec,
    Schema,
    SchemaBuilder,
)

from tablespec.operations import (
    CreateTable,
    Delete,
    DropTable,
    Insert,
    ListTables,
    OperationBuilder,
    Select,
    TableInfo,
)

from tablespec.query_builder import SQLiteQueryBuilder, get_query_builder
from tablespec.types import RenderedStatement

from tablespec.api import Database
from tablespec.compute import SQLiteEngine

from tablespec.common.exceptions import TablespecError, ErrorCode

from tablespec.logging import setup_logging


__all__ = [
    "__version__",

    "ColumnType",
    "QueryType",

    "ColumnDescriptor",
    "ColumnSpec",
    "Schema",
    "SchemaBuilder",

    "CreateTable",
    "Delete",
    "DropTable",
    "Insert",
    "ListTables",
    "OperationBuilder",
    "Select",
    "TableInfo",

    "RenderedStatement",
    "SQLiteQueryBuilder",
    "get_query_builder",

    "Database",
    "SQLiteEngine",

    # Exceptions (public API)
    "TablespecError",
    "ErrorCode",

    "setup_logging",
]
