"""Query Builder Factory.

This module provides a factory for creating query builders. SQLite is the
only target engine, so the factory mainly wires an optional column
introspector into the builder.
"""

from typing import Optional

from tablespec.protocols import ColumnIntrospector
from tablespec.query_builder.sqlite import SQLiteQueryBuilder


class QueryBuilderFactory:
    """Factory for creating query builders.

    Example:
        >>> builder = QueryBuilderFactory.create()
        >>> builder = QueryBuilderFactory.create(introspector=engine)
    """

    @staticmethod
    def create(introspector: Optional[ColumnIntrospector] = None) -> SQLiteQueryBuilder:
        """Create a SQLite query builder.

        Args:
            introspector: Optional source of table columns for inserts
                that omit their target columns (usually the engine).
        """
        return SQLiteQueryBuilder(introspector)


def get_query_builder(introspector: Optional[ColumnIntrospector] = None) -> SQLiteQueryBuilder:
    """Get a query builder, optionally bound to a column introspector."""
    return QueryBuilderFactory.create(introspector)
