from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for tablespec operations.

    Each category has a specific prefix for easy identification in logs.

    Attributes:
        CONFIG_*: Configuration-related errors
        VALIDATION_*: Input validation errors
        SCHEMA_*: Schema definition errors
        RESOURCE_*: Missing tables or columns
        EXECUTION_*: Errors raised by the execution engine
    """
    # Configuration errors
    CONFIG_ERROR = "CONFIG_001"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_001"
    ARITY_MISMATCH = "VALIDATION_002"
    INVALID_ARITY = "VALIDATION_003"

    # Schema errors
    DUPLICATE_COLUMN = "SCHEMA_001"
    DUPLICATE_PRIMARY_KEY = "SCHEMA_002"
    INVALID_TYPE = "SCHEMA_003"
    INVALID_CONSTRAINT = "SCHEMA_004"

    # Resource errors
    UNKNOWN_COLUMN = "RESOURCE_002"

    # Execution errors
    EXECUTION_ERROR = "EXECUTION_001"
    QUERY_EXECUTION_ERROR = "EXECUTION_002"


class TablespecError(Exception):
    """Base exception for all tablespec errors.

    Subclasses pin an error code and collect the offending identifier or
    value into ``details`` so failures can be traced back to the ad hoc
    schema definition that caused them.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
        is_retryable: Whether the error is transient and can be retried
    """

    default_code: ErrorCode = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        is_retryable: bool = False
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}
        self.cause = cause
        self.is_retryable = is_retryable

        # Lazy import to avoid circular dependency with the logging package
        from tablespec.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={
                "error_code": self.error_code.value,
                "details": self.details,
                "is_retryable": is_retryable,
            },
            exc_info=cause is not None
        )

    def __str__(self) -> str:
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
            "is_retryable": self.is_retryable
        }


class DuplicateColumnError(TablespecError):
    """A column with the same name already exists in the schema."""

    default_code = ErrorCode.DUPLICATE_COLUMN

    def __init__(self, column_name: str, **kwargs):
        self.column_name = column_name
        super().__init__(
            f"Error adding column - '{column_name}' already exists",
            details={"column": column_name},
            **kwargs
        )


class DuplicatePrimaryKeyError(TablespecError):
    """A second primary-key column was requested."""

    default_code = ErrorCode.DUPLICATE_PRIMARY_KEY

    def __init__(self, column_name: str, existing_primary_key: str, **kwargs):
        self.column_name = column_name
        self.existing_primary_key = existing_primary_key
        super().__init__(
            f"Error adding column '{column_name}' as primary key - "
            f"'{existing_primary_key}' is already the primary key",
            details={"column": column_name, "primary_key": existing_primary_key},
            **kwargs
        )


class InvalidTypeError(TablespecError):
    """Declared column type is outside the supported enumeration."""

    default_code = ErrorCode.INVALID_TYPE

    def __init__(self, value: Any, column_name: Optional[str] = None, **kwargs):
        from tablespec.constants import ColumnType

        self.value = value
        self.column_name = column_name
        allowed = ", ".join(ColumnType.values())
        target = f" for column '{column_name}'" if column_name else ""
        details: Dict[str, Any] = {"value": str(value), "allowed": ColumnType.values()}
        if column_name:
            details["column"] = column_name
        super().__init__(
            f"Invalid column type {value!r}{target}. Must be one of: {allowed}",
            details=details,
            **kwargs
        )


class InvalidConstraintError(TablespecError):
    """Table constraint text is empty."""

    default_code = ErrorCode.INVALID_CONSTRAINT

    def __init__(self, value: Any, **kwargs):
        self.value = value
        super().__init__(
            f"Invalid table constraint {value!r}: constraint text cannot be empty",
            details={"value": str(value)},
            **kwargs
        )


class ArityMismatchError(TablespecError):
    """Number of values does not match the number of target columns."""

    default_code = ErrorCode.ARITY_MISMATCH

    def __init__(
        self,
        message: str,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
        **kwargs
    ):
        self.expected = expected
        self.actual = actual
        details = kwargs.pop("details", {})
        if expected is not None:
            details["expected"] = expected
        if actual is not None:
            details["actual"] = actual
        super().__init__(message, details=details, **kwargs)


class InvalidArityError(ArityMismatchError):
    """Requested placeholder count is not a non-negative integer."""

    default_code = ErrorCode.INVALID_ARITY

    def __init__(self, value: Any, **kwargs):
        self.value = value
        super().__init__(
            f"Invalid placeholder count {value!r}: must be a non-negative integer",
            details={"value": str(value)},
            **kwargs
        )


class UnknownColumnError(TablespecError):
    """Target columns could not be inferred for a table."""

    default_code = ErrorCode.UNKNOWN_COLUMN

    def __init__(self, table_name: str, reason: str, **kwargs):
        self.table_name = table_name
        super().__init__(
            f"Cannot infer columns for table '{table_name}': {reason}",
            details={"table": table_name},
            **kwargs
        )


class QueryExecutionError(TablespecError):
    """The execution engine failed to run a rendered statement."""

    default_code = ErrorCode.QUERY_EXECUTION_ERROR


def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> TablespecError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        TablespecError with CONFIG_ERROR code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key

    return TablespecError(
        message=message,
        error_code=ErrorCode.CONFIG_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def query_execution_error(
    query: str,
    original_error: Exception,
    **kwargs
) -> QueryExecutionError:
    """Create a query execution error.

    Args:
        query: SQL statement that failed
        original_error: The underlying exception
        **kwargs: Additional error details

    Returns:
        QueryExecutionError wrapping the engine exception
    """
    details = kwargs.get('details', {})
    details["query"] = query[:500] + "..." if len(query) > 500 else query

    return QueryExecutionError(
        message=f"Query execution failed: {str(original_error)}",
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )
