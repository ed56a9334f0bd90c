"""Tests for plan-ingest logging."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from plan_ingest.errors import ConfigurationError
from plan_ingest.logging import (
    HumanFormatter,
    JSONFormatter,
    StructuredLogger,
    configure_logging,
    get_logger,
)


def _record(level: int = logging.INFO, msg: str = "grammar_declined", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="plan_ingest.parser",
        level=level,
        pathname="parser.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


# =============================================================================
# Formatter Tests
# =============================================================================


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_format_basic_message(self) -> None:
        """Test the standard fields are present."""
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "plan_ingest.parser"
        assert data["message"] == "grammar_declined"
        assert "timestamp" in data
        assert "location" not in data

    def test_format_with_extra(self) -> None:
        """Test extra fields are merged into the object."""
        data = json.loads(JSONFormatter().format(_record(grammar="json", phase_count=2)))

        assert data["grammar"] == "json"
        assert data["phase_count"] == 2

    def test_format_error_includes_location(self) -> None:
        """Test error records carry file and line."""
        data = json.loads(JSONFormatter().format(_record(level=logging.ERROR)))

        assert data["location"]["file"] == "parser.py"
        assert data["location"]["line"] == 10

    def test_format_exception(self) -> None:
        """Test exception info is rendered."""
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError: boom" in data["exception"]

    def test_unserializable_extra(self) -> None:
        """Test non-JSON values fall back to str()."""
        data = json.loads(JSONFormatter().format(_record(obj=object())))

        assert data["obj"].startswith("<object object")


class TestHumanFormatter:
    """Tests for HumanFormatter."""

    def test_format_line(self) -> None:
        """Test level, logger and message appear on one line."""
        output = HumanFormatter().format(_record())

        assert "INFO" in output
        assert "plan_ingest.parser: grammar_declined" in output

    def test_format_fields(self) -> None:
        """Test extra fields are appended as key=value."""
        output = HumanFormatter().format(_record(grammar="markdown"))

        assert output.endswith("grammar=markdown")


# =============================================================================
# StructuredLogger Tests
# =============================================================================


class TestStructuredLogger:
    """Tests for StructuredLogger."""

    def test_get_logger_prefixes_namespace(self) -> None:
        """Test names are placed under plan_ingest."""
        assert get_logger("parser").name == "plan_ingest.parser"
        assert get_logger("plan_ingest.cli").name == "plan_ingest.cli"
        assert get_logger("plan_ingest").name == "plan_ingest"

    def test_child(self) -> None:
        """Test child loggers nest under the parent."""
        assert get_logger("grammars").child("json").name == "plan_ingest.grammars.json"

    def test_fields_become_record_attributes(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test keyword fields reach the record as extras."""
        logger = get_logger("test")

        with caplog.at_level(logging.INFO, logger="plan_ingest"):
            logger.info("grammar_matched", grammar="json", phase_count=3)

        record = caplog.records[-1]
        assert record.getMessage() == "grammar_matched"
        assert record.grammar == "json"
        assert record.phase_count == 3

    @pytest.mark.parametrize("method,level", [
        ("debug", logging.DEBUG),
        ("info", logging.INFO),
        ("warning", logging.WARNING),
        ("error", logging.ERROR),
    ])
    def test_levels(self, caplog: pytest.LogCaptureFixture, method: str, level: int) -> None:
        """Test each method logs at its level."""
        logger = StructuredLogger("plan_ingest.test")

        with caplog.at_level(logging.DEBUG, logger="plan_ingest"):
            getattr(logger, method)("event")

        assert caplog.records[-1].levelno == level

    def test_exception_attaches_traceback(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test exception() records exc_info."""
        logger = get_logger("test")

        with caplog.at_level(logging.ERROR, logger="plan_ingest"):
            try:
                raise RuntimeError("bad")
            except RuntimeError:
                logger.exception("failed", step="load")

        record = caplog.records[-1]
        assert record.exc_info is not None
        assert record.step == "load"

    def test_disabled_level_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test records below the effective level are not emitted."""
        logger = get_logger("test")

        with caplog.at_level(logging.WARNING, logger="plan_ingest"):
            logger.debug("hidden")

        assert "hidden" not in caplog.text


# =============================================================================
# configure_logging Tests
# =============================================================================


@pytest.mark.usefixtures("clean_env", "reset_logging")
class TestConfigureLogging:
    """Tests for configure_logging."""

    def _installed(self) -> list[logging.Handler]:
        logger = logging.getLogger("plan_ingest")
        return [h for h in logger.handlers if getattr(h, "_plan_ingest_handler", False)]

    def test_defaults(self) -> None:
        """Test WARNING level with the human formatter."""
        configure_logging()

        assert logging.getLogger("plan_ingest").level == logging.WARNING
        (handler,) = self._installed()
        assert isinstance(handler.formatter, HumanFormatter)

    def test_json_format(self) -> None:
        """Test the json format selects JSONFormatter."""
        configure_logging(level="debug", format="json")

        assert logging.getLogger("plan_ingest").level == logging.DEBUG
        assert isinstance(self._installed()[0].formatter, JSONFormatter)

    def test_numeric_level(self) -> None:
        """Test integer levels are accepted."""
        configure_logging(level=logging.INFO)

        assert logging.getLogger("plan_ingest").level == logging.INFO

    def test_env_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test level and format come from the environment."""
        monkeypatch.setenv("PLAN_INGEST_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("PLAN_INGEST_LOG_FORMAT", "JSON")

        configure_logging()

        assert logging.getLogger("plan_ingest").level == logging.ERROR
        assert isinstance(self._installed()[0].formatter, JSONFormatter)

    def test_reconfigure_replaces_handler(self) -> None:
        """Test repeated calls keep a single installed handler."""
        configure_logging()
        configure_logging(format="json")

        assert len(self._installed()) == 1

    def test_writes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test output goes to stderr."""
        configure_logging(level="INFO", format="json")

        get_logger("test").info("hello", grammar="json")

        captured = capsys.readouterr()
        assert captured.out == ""
        line = json.loads(captured.err.strip().splitlines()[-1])
        assert line["message"] == "hello"
        assert line["grammar"] == "json"

    def test_unknown_format(self) -> None:
        """Test an unknown format is a configuration error."""
        with pytest.raises(ConfigurationError, match="log format"):
            configure_logging(format="xml")

    def test_unknown_level(self) -> None:
        """Test an unknown level is a configuration error."""
        with pytest.raises(ConfigurationError, match="log level") as exc_info:
            configure_logging(level="LOUD")

        assert exc_info.value.config_key == "PLAN_INGEST_LOG_LEVEL"
