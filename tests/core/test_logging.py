"""
Tests for core/logging module

Covers the formatters, the logger adapter, correlation context variables
and the LogTimer context manager.
"""

import json
import logging
from unittest.mock import MagicMock

import pytest

from demoforge.core.logging import (
    DevelopmentFormatter,
    LoggerAdapter,
    LogTimer,
    StructuredFormatter,
    batch_id_var,
    clear_context,
    get_logger,
    render_id_var,
    set_batch_id,
    set_render_id,
    setup_logging,
)


def _record(msg="Test message", **extra):
    record = logging.LogRecord(
        name="test.module",
        level=logging.INFO,
        pathname="/path/to/file.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    """Test suite for StructuredFormatter"""

    def test_format_basic_log(self):
        parsed = json.loads(StructuredFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Test message"
        assert "timestamp" in parsed

    def test_extra_fields(self):
        parsed = json.loads(StructuredFormatter().format(_record(primitives=12, component="compositor")))
        assert parsed["extra"] == {"primitives": 12, "component": "compositor"}

    def test_render_id_included(self):
        set_render_id("render-123")
        parsed = json.loads(StructuredFormatter().format(_record()))
        assert parsed["render_id"] == "render-123"


class TestDevelopmentFormatter:
    """Test suite for DevelopmentFormatter"""

    def test_includes_message_and_context(self):
        set_batch_id("batch-abcdef123")
        line = DevelopmentFormatter().format(_record("Rendering"))
        assert "Rendering" in line
        assert "batch:batch-ab" in line


class TestLoggerAdapter:
    """Test suite for LoggerAdapter and context variables"""

    def test_adds_component_and_ids(self):
        set_render_id("r1")
        set_batch_id("b1")
        adapter = get_logger("demoforge.test", component="engine")
        _, kwargs = adapter.process("msg", {})
        assert kwargs["extra"] == {"render_id": "r1", "batch_id": "b1", "component": "engine"}

    def test_keeps_caller_extra(self):
        adapter = LoggerAdapter(logging.getLogger("x"), {})
        _, kwargs = adapter.process("msg", {"extra": {"clips": 2}})
        assert kwargs["extra"] == {"clips": 2}

    def test_clear_context(self):
        set_render_id("r1")
        set_batch_id("b1")
        clear_context()
        assert render_id_var.get() is None
        assert batch_id_var.get() is None


class TestSetupLogging:
    """Test suite for setup_logging"""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_json_console_and_file(self, tmp_path):
        log_file = tmp_path / "logs" / "render.log"
        setup_logging(level="DEBUG", log_file=log_file, use_json=True)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)
        assert log_file.parent.exists()

        setup_logging(level="WARNING", use_json=False)
        assert isinstance(logging.getLogger().handlers[0].formatter, DevelopmentFormatter)

    def test_defaults_from_config(self, monkeypatch):
        from demoforge import config
        monkeypatch.setattr(config, "LOG_LEVEL", "ERROR")
        monkeypatch.setattr(config, "LOG_JSON", True)
        setup_logging()
        root = logging.getLogger()
        assert root.level == logging.ERROR
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)


class TestLogTimer:
    """Test suite for LogTimer"""

    def test_logs_start_and_completion(self):
        logger = MagicMock()
        with LogTimer(logger, "render clip") as timer:
            pass

        assert timer.duration is not None and timer.duration >= 0
        messages = [call.args[1] for call in logger.log.call_args_list]
        assert messages == ["Starting: render clip", "Completed: render clip"]

    def test_logs_failure(self):
        logger = MagicMock()
        with pytest.raises(RuntimeError):
            with LogTimer(logger, "render clip"):
                raise RuntimeError("boom")

        logger.error.assert_called_once()
        assert logger.error.call_args.args[0] == "Failed: render clip"
