"""Operation builder for creating statement operations.

This module provides a registry-based builder that creates operation
instances from a ``QueryType``, and restores operations serialized with
``to_dict()``.
"""

from typing import Any, Dict, Type

from tablespec.constants.sql import QueryType
from tablespec.logging import get_logger
from tablespec.operations.base import BaseOperation
from tablespec.operations.catalog import ListTables, TableInfo
from tablespec.operations.ddl import CreateTable, DropTable
from tablespec.operations.dml import Delete, Insert, Select

logger = get_logger(__name__)


class OperationBuilder:
    """Builder for creating operation instances based on QueryType.

    Example:
        >>> operation = OperationBuilder.create_operation(
        ...     QueryType.SELECT,
        ...     table_name="users",
        ...     conditions=["age > 30"],
        ... )
    """

    # Registry mapping QueryType to Operation class
    _registry: Dict[QueryType, Type[BaseOperation]] = {
        QueryType.SELECT: Select,
        QueryType.INSERT: Insert,
        QueryType.DELETE: Delete,
        QueryType.CREATE_TABLE: CreateTable,
        QueryType.DROP_TABLE: DropTable,
        QueryType.LIST_TABLES: ListTables,
        QueryType.TABLE_INFO: TableInfo,
    }

    @classmethod
    def operation_class(cls, query_type: Any) -> Type[BaseOperation]:
        """Resolve the operation class registered for a query type.

        Raises:
            ValueError: If the query type is unknown
        """
        try:
            query_type = QueryType(query_type)
        except ValueError as e:
            raise ValueError(f"Invalid operation_type: {query_type}") from e

        operation_class = cls._registry.get(query_type)
        if operation_class is None:
            raise ValueError(f"No operation registered for QueryType.{query_type.value}")
        return operation_class

    @classmethod
    def create_operation(cls, query_type: QueryType, **kwargs: Any) -> BaseOperation:
        """Create an operation instance from QueryType and parameters.

        Args:
            query_type: The type of statement to create
            **kwargs: Operation-specific fields

        Returns:
            Configured operation instance

        Raises:
            ValueError: If the query type is unknown
            pydantic.ValidationError: If the fields are invalid for the operation
        """
        operation_class = cls.operation_class(query_type)
        logger.debug(f"Creating {operation_class.__name__} operation")
        return operation_class(**kwargs)

    @classmethod
    def create_operation_from_dict(cls, operation_dict: Dict[str, Any]) -> BaseOperation:
        """Create operation instance from dictionary.

        Deserializes operations serialized with ``TablespecBaseModel.to_dict()``.

        Raises:
            ValueError: If operation type is missing or unknown
        """
        operation_type_value = operation_dict.get('operation_type')
        if not operation_type_value:
            raise ValueError("operation_type is required in operation dictionary")

        operation_class = cls.operation_class(operation_type_value)
        # operation_type is a frozen default on every operation class
        fields = {k: v for k, v in operation_dict.items() if k != 'operation_type'}
        return operation_class.model_validate(fields)
