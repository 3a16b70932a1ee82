"""Common exceptions for tablespec.

The exception system pairs every typed error with an error code from
``ErrorCode``. All exceptions inherit from ``TablespecError`` and carry
structured ``details`` naming the offending identifier or value.
"""

from tablespec.common.exceptions import (
    TablespecError,
    ErrorCode,
    DuplicateColumnError,
    DuplicatePrimaryKeyError,
    InvalidTypeError,
    InvalidConstraintError,
    ArityMismatchError,
    InvalidArityError,
    UnknownColumnError,
    QueryExecutionError,
    # Helper functions
    configuration_error,
    query_execution_error,
)

__all__ = [
    "TablespecError",
    "ErrorCode",
    "DuplicateColumnError",
    "DuplicatePrimaryKeyError",
    "InvalidTypeError",
    "InvalidConstraintError",
    "ArityMismatchError",
    "InvalidArityError",
    "UnknownColumnError",
    "QueryExecutionError",
    "configuration_error",
    "query_execution_error",
]
