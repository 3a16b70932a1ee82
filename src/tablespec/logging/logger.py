"""JSON log formatting and ``dictConfig`` setup for tablespec.

Records are emitted as one JSON object per line. Attributes passed through
``extra=`` (error codes, ``db.statement``, operation attributes) become top
level keys, and the ids of the active OpenTelemetry span are attached so
engine logs line up with the ``traced`` spans.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, Optional

from opentelemetry import trace

# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_ATTRS: FrozenSet[str] = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

STATEMENT_KEY = "db.statement"
DEFAULT_STATEMENT_LIMIT = 2000


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _span_ids() -> Dict[str, str]:
    context = trace.get_current_span().get_span_context()
    if not context.is_valid:
        return {}
    return {
        "trace_id": format(context.trace_id, "032x"),
        "span_id": format(context.span_id, "016x"),
    }


class CustomJsonFormatter(logging.Formatter):
    """Render records as JSON with their ``extra`` fields and span ids.

    Args:
        statement_limit: Longest ``db.statement`` value written as is;
            longer statements are cut and suffixed with ``...``.
    """

    def __init__(self, statement_limit: int = DEFAULT_STATEMENT_LIMIT):
        super().__init__()
        self.statement_limit = statement_limit

    def _extras(self, record: logging.LogRecord) -> Dict[str, Any]:
        extras = {key: value for key, value in vars(record).items() if key not in _STANDARD_ATTRS}
        statement = extras.get(STATEMENT_KEY)
        if isinstance(statement, str) and len(statement) > self.statement_limit:
            extras[STATEMENT_KEY] = statement[:self.statement_limit] + "..."
        return extras

    def format(self, record: logging.LogRecord) -> str:
        entry = self._extras(record)
        entry.update(
            timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
        )
        entry.update(_span_ids())
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _logging_config(level: str, statement_limit: int) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "tablespec_json": {
                "()": "tablespec.logging.logger.CustomJsonFormatter",
                "statement_limit": statement_limit,
            }
        },
        "filters": {
            "tablespec_context": {
                "()": "tablespec.logging.filters.ContextFilter",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "tablespec_json",
                "filters": ["tablespec_context"],
                "stream": "ext://sys.stdout",
            }
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }


def setup_logging(level: Optional[str] = None, statement_limit: int = DEFAULT_STATEMENT_LIMIT) -> None:
    """Send JSON logs to stdout through ``logging.config.dictConfig``.

    Args:
        level: Root log level; the ``log_level`` setting when omitted.
            ``DEBUG`` shows every rendered and executed statement.
        statement_limit: Truncation length for logged SQL statements
    """
    if level is None:
        from tablespec.settings import get_settings
        level = get_settings().log_level

    logging.config.dictConfig(_logging_config(level.upper(), statement_limit))
