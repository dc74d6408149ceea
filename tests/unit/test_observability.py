"""Tests for observability/logger.py, observability/metrics.py and their wiring."""
import io
import json
import logging
import sys

import pytest

from mdsurface.config import EditorConfig
from mdsurface.editor import MarkdownEditor
from mdsurface.observability import (
    MetricsHook,
    NoopMetricsHook,
    StructuredFormatter,
    get_logger,
    resolve_metrics,
    set_level,
)


class TestStructuredFormatter:
    def _get_record(self, msg, level=logging.INFO, exc_info=None, extra_fields=None):
        record = logging.LogRecord(
            name="test",
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

    def test_basic_format(self):
        result = json.loads(StructuredFormatter().format(self._get_record("hello world")))
        assert result["message"] == "hello world"
        assert result["level"] == "INFO"
        assert result["logger"] == "test"
        assert "ts" in result

    def test_extra_fields_merged(self):
        record = self._get_record("msg", extra_fields={"op": "render", "blocks": 5})
        result = json.loads(StructuredFormatter().format(record))
        assert result["op"] == "render"
        assert result["blocks"] == 5

    def test_exception_info_included(self):
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()
        result = json.loads(StructuredFormatter().format(self._get_record("e", exc_info=exc_info)))
        assert "ValueError" in result["exception"]

    def test_non_serializable_extra_uses_str(self):
        record = self._get_record("msg", extra_fields={"obj": object()})
        result = json.loads(StructuredFormatter().format(record))
        assert result["obj"].startswith("<object object")


class TestGetLogger:
    def test_returns_logger_with_handler(self):
        logger = get_logger("test.mdsurface.unique1")
        assert isinstance(logger, logging.Logger)
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_string_level(self):
        logger = get_logger("test.mdsurface.unique2", level="warning")
        assert logger.level == logging.WARNING

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError):
            get_logger("test.mdsurface.unique3", level="LOUD")

    def test_idempotent_no_duplicate_handlers(self):
        name = "test.mdsurface.unique4"
        get_logger(name)
        assert len(get_logger(name).handlers) == 1

    def test_custom_stream(self):
        stream = io.StringIO()
        logger = get_logger("test.mdsurface.stream_unique", stream=stream)
        logger.info("hello", extra={"extra_fields": {"key": "val"}})
        line = json.loads(stream.getvalue())
        assert line["message"] == "hello"
        assert line["key"] == "val"

    def test_set_level(self):
        logger = get_logger("test.mdsurface.unique5")
        set_level(logger, "ERROR")
        assert logger.level == logging.ERROR
        set_level(logger, logging.DEBUG)
        assert logger.level == logging.DEBUG


class TestMetricsHooks:
    def test_noop_conforms_to_protocol(self):
        assert isinstance(NoopMetricsHook(), MetricsHook)

    def test_noop_methods_return_none(self):
        hook = NoopMetricsHook()
        assert hook.increment("x") is None
        assert hook.timing("x", 1.0) is None
        assert hook.gauge("x", 2.0, tags={"env": "test"}) is None

    def test_resolve_metrics_default(self):
        assert isinstance(resolve_metrics(None), NoopMetricsHook)

    def test_resolve_metrics_passthrough(self, metrics):
        assert resolve_metrics(metrics) is metrics

    def test_recording_hook_conforms(self, metrics):
        assert isinstance(metrics, MetricsHook)


class TestEditorLogging:
    @pytest.fixture
    def captured(self):
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(StructuredFormatter())
        logger = logging.getLogger("mdsurface.editor")
        logger.addHandler(handler)
        yield stream
        logger.removeHandler(handler)

    def _records(self, stream):
        return [json.loads(line) for line in stream.getvalue().splitlines()]

    def test_save_logged_at_info(self, captured):
        editor = MarkdownEditor(EditorConfig(log_level="INFO"), markdown="abc")
        editor.save()
        saves = [r for r in self._records(captured) if r.get("op") == "save"]
        assert saves == [saves[0]]
        assert saves[0]["filename"] == "document.md"
        assert saves[0]["bytes"] == 3

    def test_render_logged_at_debug(self, captured):
        MarkdownEditor(EditorConfig(log_level="DEBUG"), markdown="abc")
        renders = [r for r in self._records(captured) if r.get("op") == "render"]
        assert renders[-1]["message"] == "surface re-rendered"
        assert renders[-1]["blocks"] == 1

    def test_default_level_is_quiet(self, captured):
        MarkdownEditor(markdown="abc").save()
        assert captured.getvalue() == ""
