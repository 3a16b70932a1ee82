"""Query builder module for SQL generation.

Query builders translate operations into rendered statements but do NOT
execute them; that is handled by the engine.

Architecture:
    - clauses.py: Typed clause fragments (column definitions, placeholders,
      WHERE and ORDER BY stitching) and the single join step
    - base.py: Abstract base class and operation dispatch
    - sqlite.py: SQLite statement templates
    - factory.py: Builder construction

Example:
    >>> from tablespec.query_builder import get_query_builder
    >>> from tablespec.operations import Select
    >>>
    >>> builder = get_query_builder()
    >>> statement = builder.build_query(
    ...     Select(table_name="t", column_names=["c"], conditions=["x>2"], order_by=["y DESC"])
    ... )
    >>> print(statement.text)
    SELECT c FROM t WHERE (x>2) ORDER BY y DESC

Security:
    Identifiers and fragments are embedded verbatim. Row values always
    travel as bound parameters and never appear in statement text.
"""

from tablespec.query_builder.base import BaseQueryBuilder
from tablespec.query_builder.sqlite import SQLiteQueryBuilder
from tablespec.query_builder.factory import QueryBuilderFactory, get_query_builder

__all__ = [
    "BaseQueryBuilder",
    "SQLiteQueryBuilder",
    "QueryBuilderFactory",
    "get_query_builder",
]
