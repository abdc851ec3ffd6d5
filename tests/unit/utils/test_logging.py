"""Tests for logging configuration utilities."""

from __future__ import annotations

from collections.abc import Iterator
from io import StringIO
import json
import logging
from pathlib import Path
import sys

import pytest

from glowline.core.utils.logging import (
    StructuredJSONFormatter,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Put the root logger back the way pytest left it."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def _record(msg: str = "Test message", level: int = logging.INFO) -> logging.LogRecord:
    record = logging.LogRecord(
        name="glowline.test",
        level=level,
        pathname="/path/to/session.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    record.funcName = "compile"
    record.module = "session"
    return record


class TestStructuredJSONFormatter:
    """Test suite for StructuredJSONFormatter."""

    def test_basic_log_format(self) -> None:
        """Test basic log record formatting to JSON."""
        data = json.loads(StructuredJSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["message"] == "Test message"
        assert data["timestamp"].endswith("+00:00")
        assert data["context"]["logger_name"] == "glowline.test"
        assert data["context"]["module"] == "session"
        assert data["context"]["function"] == "compile"
        assert data["context"]["line"] == 42

    def test_extra_fields_in_context(self) -> None:
        """Test extra= fields land in context."""
        record = _record()
        record.design_id = "porch"
        record.pixel_count = 100

        context = json.loads(StructuredJSONFormatter().format(record))["context"]
        assert context["design_id"] == "porch"
        assert context["pixel_count"] == 100
        assert "msg" not in context

    def test_exception_details(self) -> None:
        """Test exception type, message and trace are captured."""
        try:
            raise ValueError("bad roofline")
        except ValueError:
            record = _record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        context = json.loads(StructuredJSONFormatter().format(record))["context"]
        assert context["error_type"] == "ValueError"
        assert context["error_message"] == "bad roofline"
        assert "Traceback" in context["stack_trace"]

    def test_message_arguments_interpolated(self) -> None:
        """Test %-style arguments are applied."""
        record = _record(msg="Parsed %d layer(s)")
        record.args = (3,)
        data = json.loads(StructuredJSONFormatter().format(record))
        assert data["message"] == "Parsed 3 layer(s)"


class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_standard_logging(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test text logging to stdout."""
        configure_logging(level="INFO")
        logging.getLogger("glowline.standard").info("Compiled design")

        out = capsys.readouterr().out
        assert "Compiled design" in out
        assert "glowline.standard" in out
        assert "INFO" in out

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test records below the level are dropped."""
        configure_logging(level="warning")
        logger = logging.getLogger("glowline.level")
        logger.info("hidden")
        logger.warning("shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out

    def test_custom_format_string(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a custom text format is applied."""
        configure_logging(level="INFO", format_string="%(levelname)s|%(message)s")
        logging.getLogger("glowline.custom").info("Custom format")
        assert "INFO|Custom format" in capsys.readouterr().out

    def test_structured_to_file(self, tmp_path: Path) -> None:
        """Test JSON lines written to a file."""
        log_file = tmp_path / "glowline.jsonl"
        configure_logging(level="DEBUG", structured=True, filename=str(log_file))

        logger = logging.getLogger("glowline.file")
        logger.debug("Debug message")
        logger.warning("Warning message")

        lines = [json.loads(line) for line in log_file.read_text().splitlines() if line]
        assert [line["level"] for line in lines[-2:]] == ["DEBUG", "WARNING"]
        assert all("logger_name" in line["context"] for line in lines)

    def test_unknown_level(self) -> None:
        """Test unknown level names are rejected."""
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging(level="LOUD")

    def test_transport_loggers_quietened(self) -> None:
        """Test httpx chatter is held at WARNING."""
        configure_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING


class TestGetLogger:
    """Test suite for get_logger function."""

    def test_without_context(self) -> None:
        """Test a plain logger is returned without context."""
        logger = get_logger("glowline.plain")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "glowline.plain"

    def test_with_context(self) -> None:
        """Test context wraps the logger in an adapter."""
        logger = get_logger("glowline.context", design_id="porch")
        assert isinstance(logger, logging.LoggerAdapter)
        assert logger.extra["design_id"] == "porch"

    def test_adapter_context_in_structured_output(self) -> None:
        """Test adapter context appears in JSON records."""
        stream = StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(StructuredJSONFormatter())

        adapter = get_logger("glowline.adapter", design_id="porch")
        adapter.logger.addHandler(handler)
        adapter.logger.setLevel(logging.INFO)
        try:
            adapter.info("Saved")
        finally:
            adapter.logger.removeHandler(handler)

        data = json.loads(stream.getvalue().strip())
        assert data["message"] == "Saved"
        assert data["context"]["design_id"] == "porch"
