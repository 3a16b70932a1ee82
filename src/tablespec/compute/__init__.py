"""Execution engines for rendered statements.

The compute layer is the only part of tablespec that touches a database.
``SQLiteEngine`` implements the ``ExecutionCollaborator`` protocol on top of
SQLAlchemy.
"""

from tablespec.compute.engine import SQLiteEngine

__all__ = [
    "SQLiteEngine",
]
