"""Column model definitions.

``ColumnSpec`` is the caller-authored, build-time description of one column.
``ColumnDescriptor`` is the read-only shape returned by the engine when a
table is introspected (one ``PRAGMA table_info`` row). The two are kept
separate and converted explicitly in both directions.
"""

from decimal import Decimal
from typing import Any, Mapping, Optional

from pydantic import ConfigDict, Field, field_validator

from tablespec.common.exceptions import InvalidTypeError
from tablespec.constants.sql import ColumnType
from tablespec.types.base import TablespecBaseModel

_SCALAR_DEFAULT_TYPES = (str, int, float, bool, Decimal)


def _coerce_column_type(value: Any, column_name: Optional[str] = None) -> ColumnType:
    if isinstance(value, ColumnType):
        return value
    if isinstance(value, str) and value in ColumnType.values():
        return ColumnType(value)
    raise InvalidTypeError(value, column_name=column_name)


class ColumnSpec(TablespecBaseModel):
    """Definition of one column for table creation.

    Examples:
        >>> ColumnSpec(name="id", type=ColumnType.INTEGER, primary_key=True)
        >>> ColumnSpec(name="label", type="TEXT", not_null=True, default_value="none")

    Attributes:
        name: Column identifier, embedded verbatim in rendered SQL
        type: One of the ``ColumnType`` members (or its exact string value)
        not_null: Render ``NOT NULL``
        default_value: Scalar rendered as ``DEFAULT '<value>'``; None omits it
        primary_key: Render ``PRIMARY KEY``
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    type: ColumnType
    not_null: bool = Field(default=False)
    default_value: Optional[Any] = Field(default=None)
    primary_key: bool = Field(default=False)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Column name cannot be blank")
        return v

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v: Any, info) -> ColumnType:
        """Restrict the declared type to the fixed enumeration."""
        return _coerce_column_type(v, info.data.get("name"))

    @field_validator("default_value")
    @classmethod
    def validate_default_value(cls, v: Any) -> Any:
        if v is not None and not isinstance(v, _SCALAR_DEFAULT_TYPES):
            raise ValueError(
                f"Default value must be a scalar (str, int, float, bool, Decimal), "
                f"got {type(v).__name__}"
            )
        return v

    @property
    def column_type(self) -> ColumnType:
        return ColumnType(self.type)

    @property
    def default_text(self) -> Optional[str]:
        """Canonical text of the default value, or None when absent.

        Booleans are written as ``1``/``0`` since SQLite stores them as
        integers.
        """
        if self.default_value is None:
            return None
        if isinstance(self.default_value, bool):
            return "1" if self.default_value else "0"
        return str(self.default_value)

    def to_descriptor(self, cid: int) -> "ColumnDescriptor":
        """Describe this column the way table introspection reports it."""
        default_text = self.default_text
        return ColumnDescriptor(
            cid=cid,
            name=self.name,
            type=self.column_type.value,
            not_null=self.not_null,
            default_value=None if default_text is None else quote_literal(default_text),
            primary_key=1 if self.primary_key else 0,
        )


class ColumnDescriptor(TablespecBaseModel):
    """Column metadata reported by the database engine.

    Mirrors one row of SQLite's ``PRAGMA table_info``. ``type`` is the
    declared type exactly as stored and ``default_value`` is the default
    expression text (string literals keep their quotes). ``primary_key`` is
    the column's 1-based position in the primary key, 0 when it is not part
    of it; a composite key numbers its columns 1, 2, ...
    """
    model_config = ConfigDict(frozen=True)

    cid: int = Field(..., ge=0)
    name: str
    type: str = Field(default="")
    not_null: bool = Field(default=False)
    default_value: Optional[str] = Field(default=None)
    primary_key: int = Field(default=0, ge=0)

    @classmethod
    def from_pragma_row(cls, row: Mapping[str, Any]) -> "ColumnDescriptor":
        """Build a descriptor from a ``PRAGMA table_info`` result row."""
        default = row.get("dflt_value")
        return cls(
            cid=row["cid"],
            name=row["name"],
            type=row.get("type") or "",
            not_null=bool(row.get("notnull")),
            default_value=None if default is None else str(default),
            primary_key=int(row.get("pk") or 0),
        )

    def to_column_spec(self) -> ColumnSpec:
        """Convert to an authoring-time ``ColumnSpec``.

        Raises:
            InvalidTypeError: If the declared type is not a supported
                column type
        """
        declared = self.type.strip().upper()
        return ColumnSpec(
            name=self.name,
            type=_coerce_column_type(declared, self.name),
            not_null=self.not_null,
            default_value=None if self.default_value is None else unquote_literal(self.default_value),
            primary_key=self.primary_key > 0,
        )


def quote_literal(text: str) -> str:
    """Wrap text in single quotes, doubling embedded quotes."""
    escaped = text.replace("'", "''")
    return f"'{escaped}'"


def unquote_literal(text: str) -> str:
    """Reverse ``quote_literal``; unquoted text is returned unchanged."""
    if len(text) >= 2 and text[0] == text[-1] == "'":
        return text[1:-1].replace("''", "'")
    return text
