"""SQL and query-related constants.

This module contains the fundamental SQL enums used across every layer of
tablespec: the statement kinds the query builder can render and the closed
set of column types a schema may declare.

These constants are in Layer 0 as they represent core SQL concepts
that can be used by any layer without creating circular dependencies.
"""

from enum import Enum


class QueryType(str, Enum):
    """SQL statement kind enumeration.

    Used by operations to declare what they describe and by query builders
    to dispatch to the matching rendering method.

    Categories:
    - DDL: CREATE_TABLE, DROP_TABLE
    - DML: INSERT, SELECT, DELETE
    - Catalog: LIST_TABLES, TABLE_INFO
    """

    # Data Query
    SELECT = "SELECT"

    # Data Manipulation (DML)
    INSERT = "INSERT"
    DELETE = "DELETE"

    # Data Definition (DDL) - Tables
    CREATE_TABLE = "CREATE_TABLE"
    DROP_TABLE = "DROP_TABLE"

    # Catalog queries
    LIST_TABLES = "LIST_TABLES"
    TABLE_INFO = "TABLE_INFO"


class ColumnType(str, Enum):
    """Column storage classes accepted in a table schema.

    The values are the exact SQL keywords emitted in CREATE TABLE
    statements. No other declared type is accepted and values are never
    coerced from one type to another.
    """

    INTEGER = "INTEGER"
    REAL = "REAL"
    NUMERIC = "NUMERIC"
    TEXT = "TEXT"
    BLOB = "BLOB"

    @classmethod
    def values(cls) -> list:
        return [member.value for member in cls]
