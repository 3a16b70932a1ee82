import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, TypeVar

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from tablespec.common.exceptions import query_execution_error
from tablespec.logging import get_logger
from tablespec.operations import TableInfo
from tablespec.protocols import Row
from tablespec.query_builder import get_query_builder
from tablespec.schema.column import ColumnDescriptor
from tablespec.settings import get_settings, sqlite_url
from tablespec.settings.main import _Settings
from tablespec.utils.decorators import retry_with_backoff, traced

logger = get_logger(__name__)

T = TypeVar("T")

_TRANSIENT_MARKERS = ("database is locked", "database table is locked", "busy")


def _is_transient(exc: Exception) -> bool:
    """True for lock contention; SQLite also uses OperationalError for syntax errors."""
    message = str(exc).lower()
    return any(marker in message for marker in _TRANSIENT_MARKERS)


class SQLiteEngine:
    """SQLAlchemy-based execution engine for SQLite databases.

    Implements the ``ExecutionCollaborator`` protocol: it runs rendered
    statements with positional parameters and reports the columns of
    existing tables. It never builds SQL from user input itself; table
    introspection is rendered through the query builder like every other
    statement.

    Each call runs inside its own ``engine.begin()`` block, so statements
    are committed individually. ``OperationalError`` (e.g. a locked
    database file) is retried with exponential backoff according to
    ``max_retries`` and ``retry_delay_seconds``.

    Example:
        >>> engine = SQLiteEngine("/tmp/results.db")
        >>> engine.execute("SELECT name FROM sqlite_master WHERE (type='table')")
        []
    """

    def __init__(self, path: Optional[str] = None, settings: Optional[_Settings] = None):
        """Initialize SQLite engine.

        Args:
            path: Database file, or ``:memory:``. Defaults to
                ``settings.database_path``.
            settings: Settings instance; the global settings when omitted
        """
        self.settings = settings or get_settings()
        self.path = path or self.settings.database_path
        self._engine: Optional[Engine] = None

    @property
    def engine(self) -> Engine:
        """Get or create the SQLAlchemy engine with lazy initialization."""
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    @property
    def filename(self) -> str:
        return self.path

    def _create_engine(self) -> Engine:
        engine = create_engine(sqlite_url(self.path), echo=self.settings.echo_sql)
        logger.info(f"Created SQLite engine for {self.path}")
        return engine

    @contextmanager
    def _get_connection(self) -> Iterator[Connection]:
        """Open a connection inside a transaction that commits on success."""
        with self.engine.begin() as conn:
            yield conn

    def _span_attributes(self, statement: str, *, operation: str, batch_total: Optional[int] = None) -> Dict[str, Any]:
        """Build OpenTelemetry span attributes for SQL operations."""
        sanitized = (statement or "").strip()
        if len(sanitized) > 4096:
            sanitized = f"{sanitized[:4093]}..."

        attributes: Dict[str, Any] = {
            "db.system": "sqlite",
            "db.operation": operation,
            "db.name": self.path,
        }
        if sanitized:
            attributes["db.statement"] = sanitized
        if batch_total is not None:
            attributes["db.batch.count"] = batch_total
        return attributes

    def _with_retry(self, func: Callable[..., T]) -> Callable[..., T]:
        return retry_with_backoff(
            max_retries=self.settings.max_retries,
            initial_delay=self.settings.retry_delay_seconds,
            retry_on=(OperationalError,),
            retry_condition=_is_transient,
        )(func)

    @traced(
        span_name="tablespec.compute.sqlite.execute",
        attribute_getter=lambda self, statement, parameters=(): self._span_attributes(
            statement,
            operation="execute",
        ),
    )
    def execute(self, statement: str, parameters: Sequence[Any] = ()) -> List[Row]:
        """Execute one statement with positional parameters.

        Returns:
            Result rows as dictionaries (empty for statements without rows)

        Raises:
            QueryExecutionError: If SQLite rejects or fails the statement
        """
        start_time = time.time()

        def _run() -> List[Row]:
            with self._get_connection() as conn:
                result = conn.exec_driver_sql(statement, tuple(parameters) if parameters else None)
                if not result.returns_rows:
                    return []
                return [dict(row) for row in result.mappings().all()]

        try:
            rows = self._with_retry(_run)()
        except SQLAlchemyError as exc:
            logger.error(
                "SQL statement failed",
                extra={"db.statement": statement, "error": str(exc)},
            )
            raise query_execution_error(statement, exc) from exc

        duration = time.time() - start_time
        logger.debug(
            "SQL statement executed",
            extra={
                "db.statement": statement,
                "row_count": len(rows),
                "duration.seconds": f"{duration:.6f}",
            },
        )
        return rows

    @traced(
        span_name="tablespec.compute.sqlite.execute_many",
        attribute_getter=lambda self, statement, parameter_sets: self._span_attributes(
            statement,
            operation="execute_many",
            batch_total=len(parameter_sets),
        ),
    )
    def execute_many(self, statement: str, parameter_sets: Sequence[Sequence[Any]]) -> int:
        """Execute one statement once per parameter set in a single transaction.

        Returns:
            Number of rows affected (0 for an empty batch, which is not sent)

        Raises:
            QueryExecutionError: If SQLite rejects or fails the statement
        """
        if not parameter_sets:
            return 0

        batch = [tuple(parameters) for parameters in parameter_sets]

        def _run() -> int:
            with self._get_connection() as conn:
                result = conn.exec_driver_sql(statement, batch)
                return result.rowcount

        try:
            rowcount = self._with_retry(_run)()
        except SQLAlchemyError as exc:
            logger.error(
                "SQL batch failed",
                extra={"db.statement": statement, "batch.total": len(batch), "error": str(exc)},
            )
            raise query_execution_error(statement, exc, details={"batch_size": len(batch)}) from exc

        logger.debug(
            "SQL batch executed",
            extra={"db.statement": statement, "batch.total": len(batch), "row_count": rowcount},
        )
        return rowcount

    def introspect_columns(self, table_name: str) -> List[ColumnDescriptor]:
        """Columns of ``table_name`` in declaration order; empty when it does not exist."""
        statement = get_query_builder().build_query(TableInfo(table_name=table_name))
        rows = self.execute(statement.text)
        return [ColumnDescriptor.from_pragma_row(row) for row in rows]

    def dispose(self) -> None:
        """Release pooled connections. The engine is recreated on next use."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def __del__(self):
        """Clean up engine on deletion."""
        if getattr(self, "_engine", None) is not None:
            self._engine.dispose()
