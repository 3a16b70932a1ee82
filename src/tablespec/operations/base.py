"""Base operation definitions.

This module defines the base operation class that all statement operations
inherit from. Operations are data structures that describe what statement
should be rendered, independent of how it is executed.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from tablespec.constants.sql import QueryType
from tablespec.types.base import TablespecBaseModel


def _stringify(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def as_list(value: Union[None, str, List[str], tuple]) -> List[str]:
    """Accept a single string where a list of strings is expected."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def check_fragments(values: List[str], field_name: str) -> List[str]:
    """Reject blank condition/ordering/column fragments."""
    for value in values:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{field_name} cannot contain blank entries: {values!r}")
    return values


class BaseOperation(TablespecBaseModel):
    """Base class for all statement operations.

    Operations are pure data structures that describe WHAT to render.
    They are transformed into SQL by query builders and the result is
    executed by an engine.

    Table names and SQL fragments are embedded verbatim in the rendered
    text; callers must not pass attacker-controlled strings.

    Attributes:
        operation_type: The kind of statement to render
        table_name: Target table
        logging_context: Free-form attributes attached to log records
    """
    operation_type: QueryType
    table_name: str = Field(..., min_length=1)
    logging_context: Dict[str, Any] = Field(
        default_factory=dict,
        description="Optional attributes for logging/tracking"
    )

    def observability_attributes(self) -> Dict[str, str]:
        """Return key attributes useful for logging and span attributes."""
        attrs: Dict[str, str] = {
            "table": self.table_name,
            "operation_type": QueryType(self.operation_type).value,
        }
        for key, value in (self.logging_context or {}).items():
            sanitized = _stringify(value)
            if sanitized is not None:
                attrs[f"context_{key}"] = sanitized
        return attrs
