"""Constants module for tablespec.

This module contains all constant values and enumerations used throughout
tablespec. As Layer 0 in the architecture, this module has no dependencies
on other tablespec modules.

Organization:
    - sql: Statement kinds and column types
"""

from tablespec.constants.sql import ColumnType, QueryType

# Placeholder marker for bound parameters (SQLite qmark paramstyle)
PLACEHOLDER = "?"

__all__ = [
    "ColumnType",
    "QueryType",
    "PLACEHOLDER",
]
