"""Tests for error codes and terminal logging."""
from __future__ import annotations

import io
import logging

import pytest

from jesthtmlreporter.errors import ERROR_TEMPLATES, ErrorCode, ReporterError, make_error
from jesthtmlreporter.log import (
    LOG_COLORS,
    LOG_PREFIX,
    LOGGER_NAME,
    RESET,
    ColorFormatter,
    configure_logging,
    log_message,
)


@pytest.fixture
def reporter_logger():
    logger = logging.getLogger(LOGGER_NAME)
    yield logger
    for handler in list(logger.handlers):
        if getattr(handler, "_jesthtmlreporter", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


class TestMakeError:
    """Tests for make_error."""

    def test_every_code_has_template(self) -> None:
        assert set(ERROR_TEMPLATES) == set(ErrorCode)

    def test_details_in_template(self) -> None:
        err = make_error(ErrorCode.E003, "neonTheme")

        assert err.code == ErrorCode.E003
        assert err.message == "Unknown theme: neonTheme"
        assert err.details is None
        assert str(err) == (
            "JHR-E003: Unknown theme: neonTheme\n"
            "  Next step: Use defaultTheme, darkTheme or lightTheme, or set styleOverridePath"
        )

    def test_details_appended(self) -> None:
        err = make_error(ErrorCode.E001, "got []")

        assert err.message == "No test data provided: got []"
        assert str(err).splitlines()[1] == "  Details: got []"

    def test_no_details(self) -> None:
        err = make_error(ErrorCode.E302)

        assert err.message == "Cannot read file"
        assert str(err).startswith("JHR-E302: Cannot read file\n")

    def test_is_exception(self) -> None:
        with pytest.raises(ReporterError, match="Cannot write file"):
            raise make_error(ErrorCode.E303, "/tmp/report.html")


class TestLogMessage:
    """Tests for log_message."""

    def test_returns_prefixed_text(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger=LOGGER_NAME)

        text = log_message("success", "Report generated (out.html)")

        assert text == "jest-html-reporter >> Report generated (out.html)"
        assert caplog.records[-1].levelno == logging.INFO
        assert caplog.records[-1].kind == "success"

    def test_error_level(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger=LOGGER_NAME)

        log_message("error", make_error(ErrorCode.E001))

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.getMessage().startswith(f"{LOG_PREFIX}JHR-E001")


class TestColorFormatter:
    """Tests for ColorFormatter."""

    @staticmethod
    def _record(level: int, kind=None) -> logging.LogRecord:
        record = logging.LogRecord(LOGGER_NAME, level, __file__, 1, "hello", None, None)
        if kind is not None:
            record.kind = kind
        return record

    @pytest.mark.parametrize("kind", ["default", "success", "error"])
    def test_kind_colors(self, kind: str) -> None:
        formatted = ColorFormatter().format(self._record(logging.INFO, kind))
        assert formatted == f"{LOG_COLORS[kind]}hello{RESET}"

    def test_error_level_without_kind(self) -> None:
        formatted = ColorFormatter().format(self._record(logging.ERROR))
        assert formatted.startswith(LOG_COLORS["error"])

    def test_no_color(self) -> None:
        assert ColorFormatter(use_color=False).format(self._record(logging.INFO, "success")) == "hello"


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_plain_stream(self, reporter_logger: logging.Logger) -> None:
        stream = io.StringIO()
        configure_logging(stream=stream)

        log_message("default", "hello")
        reporter_logger.debug("hidden")

        assert stream.getvalue() == "jest-html-reporter >> hello\n"

    def test_verbose(self, reporter_logger: logging.Logger) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, stream=stream)

        reporter_logger.debug("shown")

        assert "shown" in stream.getvalue()

    def test_replaces_previous_handler(self, reporter_logger: logging.Logger) -> None:
        first = configure_logging(stream=io.StringIO())
        second = configure_logging(stream=io.StringIO())

        assert first not in reporter_logger.handlers
        assert second in reporter_logger.handlers
