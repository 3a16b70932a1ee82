import json
import logging

from opentelemetry import trace
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags

from tablespec.logging import CustomJsonFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="tablespec.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=3,
        msg="rendered %s",
        args=("SELECT * FROM t",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_extras():
    payload = json.loads(CustomJsonFormatter().format(_record(table="t")))

    assert payload["message"] == "rendered SELECT * FROM t"
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "tablespec.test"
    assert payload["table"] == "t"
    assert "trace_id" not in payload


def test_formatter_truncates_long_statements():
    statement = "SELECT " + "x, " * 50 + "y FROM t"

    payload = json.loads(CustomJsonFormatter(statement_limit=20).format(_record(**{"db.statement": statement})))

    assert payload["db.statement"] == statement[:20] + "..."


def test_formatter_keeps_short_statements():
    payload = json.loads(CustomJsonFormatter().format(_record(**{"db.statement": "DELETE FROM t"})))

    assert payload["db.statement"] == "DELETE FROM t"


def test_formatter_adds_trace_ids_for_active_span():
    context = SpanContext(
        trace_id=0x1234,
        span_id=0x99,
        is_remote=False,
        trace_flags=TraceFlags(TraceFlags.SAMPLED),
    )

    with trace.use_span(NonRecordingSpan(context)):
        payload = json.loads(CustomJsonFormatter().format(_record()))

    assert payload["trace_id"] == format(0x1234, "032x")
    assert payload["span_id"] == format(0x99, "016x")


def test_setup_logging_uses_configured_level(monkeypatch):
    root = logging.getLogger()
    previous_level, previous_handlers = root.level, list(root.handlers)
    monkeypatch.setenv("TABLESPEC_LOG_LEVEL", "warning")
    from tablespec.settings import _reload_settings
    _reload_settings()

    try:
        setup_logging(statement_limit=64)

        assert root.level == logging.WARNING
        handler = root.handlers[-1]
        assert isinstance(handler.formatter, CustomJsonFormatter)
        assert handler.formatter.statement_limit == 64
    finally:
        root.handlers = previous_handlers
        root.setLevel(previous_level)
