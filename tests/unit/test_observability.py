"""Tests for observability/logger.py and observability/metrics.py"""
import io
import json
import logging
import sys

from notionrelay.observability import MetricsHook, NoopMetricsHook, StructuredFormatter, get_logger


def _record(msg, level=logging.INFO, exc_info=None, extra_fields=None):
    record = logging.LogRecord(
        name="notionrelay.test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    if extra_fields is not None:
        record.extra_fields = extra_fields
    return record


class TestStructuredFormatter:
    def test_basic_format(self):
        result = json.loads(StructuredFormatter().format(_record("hello")))
        assert result["message"] == "hello"
        assert result["level"] == "INFO"
        assert result["logger"] == "notionrelay.test"
        assert "ts" in result

    def test_extra_fields_merged(self):
        record = _record("Rich text truncated", extra_fields={"segments": 140, "dropped": 40})
        result = json.loads(StructuredFormatter().format(record))
        assert result["segments"] == 140
        assert result["dropped"] == 40

    def test_exception_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            exc_info = sys.exc_info()
        result = json.loads(StructuredFormatter().format(_record("err", exc_info=exc_info)))
        assert "ValueError: boom" in result["exception"]

    def test_non_serializable_extra_uses_str(self):
        record = _record("x", extra_fields={"obj": object()})
        result = json.loads(StructuredFormatter().format(record))
        assert result["obj"].startswith("<object object")


class TestGetLogger:
    def test_structured_handler_attached(self):
        logger = get_logger("notionrelay.test.handler")
        assert any(isinstance(h.formatter, StructuredFormatter) for h in logger.handlers)
        assert logger.propagate is False

    def test_string_level(self):
        logger = get_logger("notionrelay.test.level", level="warning")
        assert logger.level == logging.WARNING

    def test_no_duplicate_handlers(self):
        first = get_logger("notionrelay.test.dup")
        count = len(first.handlers)
        second = get_logger("notionrelay.test.dup")
        assert first is second
        assert len(second.handlers) == count

    def test_custom_stream_receives_json(self):
        stream = io.StringIO()
        logger = get_logger("notionrelay.test.stream", stream=stream)
        logger.info("ready", extra={"extra_fields": {"op": "test"}})
        line = json.loads(stream.getvalue().strip())
        assert line["message"] == "ready"
        assert line["op"] == "test"


class TestMetrics:
    def test_noop_satisfies_protocol(self):
        assert isinstance(NoopMetricsHook(), MetricsHook)

    def test_noop_methods_return_none(self):
        hook = NoopMetricsHook()
        assert hook.increment("a") is None
        assert hook.timing("b", 1.5, tags={"k": "v"}) is None
        assert hook.gauge("c", 3.0) is None

    def test_custom_backend_satisfies_protocol(self):
        class Recorder:
            def __init__(self):
                self.calls = []

            def increment(self, name, value=1, tags=None):
                self.calls.append(("increment", name, value))

            def timing(self, name, ms, tags=None):
                self.calls.append(("timing", name, ms))

            def gauge(self, name, value, tags=None):
                self.calls.append(("gauge", name, value))

        assert isinstance(Recorder(), MetricsHook)
