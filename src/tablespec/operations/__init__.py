"""Statement operations module.

This module provides data structures that describe SQL statements
independent of how they are rendered or executed. Operations are pure data
that can be:
- Transformed into SQL by query builders
- Serialized with ``to_dict()`` and restored with ``OperationBuilder``
"""

# Base operation
from tablespec.operations.base import BaseOperation

# DDL operations
from tablespec.operations.ddl import (
    CreateTable,
    DropTable,
)

# DML operations
from tablespec.operations.dml import (
    Select,
    Insert,
    Delete,
)

# Catalog operations
from tablespec.operations.catalog import (
    ListTables,
    TableInfo,
)

# Builder
from tablespec.operations.builder import OperationBuilder

__all__ = [
    # Base
    "BaseOperation",
    # DDL
    "CreateTable",
    "DropTable",
    # DML
    "Select",
    "Insert",
    "Delete",
    # Catalog
    "ListTables",
    "TableInfo",
    # Builder
    "OperationBuilder",
]
