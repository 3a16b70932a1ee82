"""Rendered statement model.

A ``RenderedStatement`` is the contract handed to the execution engine:
statement text with positional placeholders plus the ordered parameter
slots and, for insert batches, the validated rows to bind.
"""

from typing import Any, Sequence, Tuple

from pydantic import ConfigDict, Field

from tablespec.common.exceptions import ArityMismatchError
from tablespec.constants.sql import QueryType
from tablespec.types.base import TablespecBaseModel


class RenderedStatement(TablespecBaseModel):
    """Statement text plus bind-parameter ordering.

    Attributes:
        query_type: Statement kind that produced this text
        text: Final SQL text; never embeds row values
        parameter_slots: Column names bound by each ``?`` placeholder, in order
        parameter_sets: Validated rows to execute the same text with, one
            binding per row. Empty for statements without placeholders or
            for insert templates rendered without rows.
    """
    model_config = ConfigDict(
        use_enum_values=True,
        frozen=True
    )

    query_type: QueryType
    text: str = Field(..., min_length=1)
    parameter_slots: Tuple[str, ...] = Field(default_factory=tuple)
    parameter_sets: Tuple[Tuple[Any, ...], ...] = Field(default_factory=tuple)

    @property
    def is_batch(self) -> bool:
        return len(self.parameter_sets) > 0

    def bind(self, values: Sequence[Any]) -> Tuple[Any, ...]:
        """Check one row of values against the placeholders.

        Raises:
            ArityMismatchError: If the number of values differs from the
                number of parameter slots
        """
        row = tuple(values)
        if len(row) != len(self.parameter_slots):
            raise ArityMismatchError(
                f"Statement '{self.text}' expects {len(self.parameter_slots)} "
                f"values but {len(row)} were given",
                expected=len(self.parameter_slots),
                actual=len(row),
            )
        return row

    def __str__(self) -> str:
        return self.text
