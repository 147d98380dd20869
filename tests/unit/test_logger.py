"""Unit tests for logging infrastructure."""

import json
import logging
import sys

import pytest

from recipegen.utils.logger import JSONFormatter, RichTextFormatter, get_logger


def make_record(msg="Test message", level=logging.INFO, exc_info=None, **extra):
    record = logging.LogRecord(
        name="test_logger",
        level=level,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def fresh_logger_name(request):
    """Unique logger name with any handlers from earlier runs removed."""
    name = f"recipegen_test.{request.node.name}"
    logging.getLogger(name).handlers.clear()
    return name


class TestJSONFormatter:
    """Test JSONFormatter produces valid JSON output."""

    def test_json_formatter_outputs_valid_json(self):
        output = JSONFormatter().format(make_record())
        parsed = json.loads(output)

        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test_logger"
        assert parsed["message"] == "Test message"
        assert "timestamp" in parsed

    def test_json_formatter_includes_exception_traceback(self):
        try:
            raise ValueError("Test error")
        except ValueError:
            record = make_record("Error occurred", level=logging.ERROR, exc_info=sys.exc_info())

        parsed = json.loads(JSONFormatter().format(record))

        assert "ValueError" in parsed["exception"]

    def test_json_formatter_includes_context_fields(self):
        """generation and status_code passed via extra= end up in the JSON line, other extras do not."""
        record = make_record(generation=3, status_code=429, request_id="abc")

        parsed = json.loads(JSONFormatter().format(record))

        assert parsed["generation"] == 3
        assert parsed["status_code"] == 429
        assert "request_id" not in parsed


class TestRichTextFormatter:
    """Test RichTextFormatter output."""

    def test_rich_text_formatter_includes_level_name_and_message(self):
        output = RichTextFormatter().format(make_record())
        assert "INFO" in output
        assert "Test message" in output
        assert "test_logger" in output

    def test_rich_text_formatter_appends_context(self):
        output = RichTextFormatter().format(make_record(generation=7))
        assert "[generation=7]" in output

    def test_rich_text_formatter_includes_exception_traceback(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record("failed", level=logging.ERROR, exc_info=sys.exc_info())

        assert "RuntimeError: boom" in RichTextFormatter().format(record)


class TestGetLogger:
    """Test get_logger function."""

    def test_get_logger_does_not_stack_handlers(self, fresh_logger_name):
        first = get_logger(fresh_logger_name)
        second = get_logger(fresh_logger_name)

        assert first is second
        assert len(second.handlers) == 1

    def test_get_logger_respects_log_level_env(self, monkeypatch, fresh_logger_name):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert get_logger(fresh_logger_name).level == logging.DEBUG

    def test_invalid_log_level_defaults_to_info(self, monkeypatch, fresh_logger_name):
        monkeypatch.setenv("LOG_LEVEL", "INVALID")
        assert get_logger(fresh_logger_name).level == logging.INFO

    def test_get_logger_uses_json_formatter(self, monkeypatch, fresh_logger_name):
        monkeypatch.setenv("LOG_TYPE", "json")
        test_logger = get_logger(fresh_logger_name)
        assert isinstance(test_logger.handlers[0].formatter, JSONFormatter)

    def test_log_type_defaults_to_text(self, monkeypatch, fresh_logger_name):
        monkeypatch.delenv("LOG_TYPE", raising=False)
        test_logger = get_logger(fresh_logger_name)
        assert isinstance(test_logger.handlers[0].formatter, RichTextFormatter)


class TestModuleLevelLogger:
    """Test module-level logger instance."""

    def test_logger_is_named_recipegen(self):
        from recipegen.utils.logger import logger as imported_logger

        assert imported_logger.name == "recipegen"
        assert len(imported_logger.handlers) > 0

    def test_sdk_loggers_are_quieted(self):
        assert logging.getLogger("google_genai").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING
