"""Unit tests for logger_config: structured formatting, error logging and the call decorator."""

import json
import logging

import pytest

from text_workbench.logger_config import ErrorCategory
from text_workbench.logger_config import StructuredLogFormatter
from text_workbench.logger_config import log_structured_error
from text_workbench.logger_config import log_tool_call
from text_workbench.logger_config import safe_operation


class TestStructuredLogFormatter:
    def test_basic_entry(self):
        record = logging.LogRecord("test_logger", logging.ERROR, "test.py", 10, "Test %s", ("message",), None)

        log_data = json.loads(StructuredLogFormatter().format(record))

        assert log_data["level"] == "ERROR"
        assert log_data["logger"] == "test_logger"
        assert log_data["message"] == "Test message"

    def test_extra_fields_are_included(self):
        record = logging.LogRecord("t", logging.INFO, "t.py", 1, "msg", (), None)
        record.batch_id = "b1"

        assert json.loads(StructuredLogFormatter().format(record))["batch_id"] == "b1"

    def test_exception_info(self):
        try:
            raise ValueError("bad")
        except ValueError:
            import sys

            record = logging.LogRecord("t", logging.ERROR, "t.py", 1, "msg", (), sys.exc_info())

        log_data = json.loads(StructuredLogFormatter().format(record))

        assert log_data["exception"]["type"] == "ValueError"
        assert log_data["exception"]["message"] == "bad"


class TestLogStructuredError:
    def test_fields_reach_the_record(self, caplog):
        with caplog.at_level(logging.WARNING, logger="text_workbench.errors"):
            log_structured_error(ErrorCategory.WARNING, "something", operation="op", batch_id="b")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.error_category == "WARNING"
        assert record.operation == "op"
        assert record.batch_id == "b"


class TestSafeOperation:
    def test_success(self):
        assert safe_operation("add", lambda a, b: a + b, 1, 2) == (True, 3, None)

    def test_failure(self):
        def fail():
            raise RuntimeError("nope")

        assert safe_operation("fail", fail) == (False, None, "nope")


class TestLogToolCall:
    def test_sync(self):
        @log_tool_call
        def double(x):
            return x * 2

        assert double(2) == 4
        assert double.__name__ == "double"

    @pytest.mark.asyncio
    async def test_async(self):
        @log_tool_call
        async def echo(text):
            return text

        assert await echo("hi") == "hi"

    @pytest.mark.asyncio
    async def test_async_reraises(self):
        @log_tool_call
        async def fail():
            raise ValueError("x")

        with pytest.raises(ValueError):
            await fail()
