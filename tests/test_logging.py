"""Tests for logging setup."""

import json
import logging

import pytest

from view_mailer.config import LoggingConfig
from view_mailer.logging import (
    EVENT_LEVELS,
    ConsoleFormatter,
    StructuredFormatter,
    log_event,
    setup_logging,
)


def make_record(level=logging.INFO, msg="Delivered %s", args=("welcome",)):
    return logging.LogRecord("view_mailer.result", level, __file__, 10, msg, args, None)


class TestFormatters:
    """Tests for the console and JSON formatters."""

    def test_structured_includes_event_fields(self):
        """Test records are rendered as JSON with fields passed through extra."""
        record = make_record()
        record.event = "delivered"
        record.view_name = "welcome"

        data = json.loads(StructuredFormatter().format(record))

        assert data["message"] == "Delivered welcome"
        assert data["level"] == "INFO"
        assert data["logger"] == "view_mailer.result"
        assert data["event"] == "delivered"
        assert data["view_name"] == "welcome"
        assert "lineno" not in data

    def test_console_colours_by_level(self):
        """Test a warning is wrapped in its colour code."""
        text = ConsoleFormatter("%(message)s", color=True).format(
            make_record(logging.WARNING, "Stopped", ())
        )

        assert text == "\033[33mStopped\033[0m"

    def test_console_without_colour(self):
        """Test plain output when not writing to a terminal."""
        text = ConsoleFormatter("%(levelname)s %(message)s").format(make_record())

        assert text == "INFO Delivered welcome"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_file_handler_on_package_logger(self, package_logger, tmp_path):
        """Test handlers go on the view_mailer logger and the root is untouched."""
        root_handlers = list(logging.getLogger().handlers)
        log_file = tmp_path / "logs" / "mailer.log"

        logger = setup_logging(
            LoggingConfig(level="DEBUG", file_path=str(log_file), console_output=False)
        )

        assert logger is package_logger
        assert package_logger.level == logging.DEBUG
        assert package_logger.propagate is False
        assert logging.getLogger().handlers == root_handlers

        log_event(logging.getLogger("view_mailer.result"), "composed", "hello", view_name="x")
        for handler in package_logger.handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().splitlines()[-1])
        assert entry["message"] == "hello"
        assert entry["level"] == "DEBUG"
        assert entry["event"] == "composed"
        assert entry["view_name"] == "x"

    def test_setup_replaces_previous_handlers(self, package_logger):
        """Test calling setup twice leaves a single console handler."""
        before = list(package_logger.handlers)

        setup_logging(LoggingConfig())
        setup_logging(LoggingConfig())

        added = [h for h in package_logger.handlers if h not in before]
        assert len(added) == 1

    def test_no_output_propagates(self, package_logger):
        """Test the package logger defers to the application without handlers."""
        before = list(package_logger.handlers)

        setup_logging(LoggingConfig(console_output=False))

        assert package_logger.handlers == before
        assert package_logger.propagate is True

    def test_library_loggers_are_quieted(self, package_logger, monkeypatch):
        """Test template and validation library chatter is held at WARNING."""
        jinja_logger = logging.getLogger("jinja2")
        monkeypatch.setattr(jinja_logger, "level", logging.NOTSET)

        setup_logging(LoggingConfig(level="DEBUG", console_output=False))

        assert jinja_logger.level == logging.WARNING

    def test_invalid_level_raises(self, package_logger):
        """Test an unknown level name is rejected."""
        with pytest.raises(ValueError):
            setup_logging(LoggingConfig(level="LOUD", console_output=False))


class TestMailerEvents:
    """Tests for the levels mailer events are logged at."""

    def test_event_levels(self):
        """Test composing is quiet, delivering informs and cancelling warns."""
        assert EVENT_LEVELS == {
            "composed": logging.DEBUG,
            "delivered": logging.INFO,
            "cancelled": logging.WARNING,
        }

    def test_delivery_is_logged(self, caplog, view_engines, text_engine, mailer):
        """Test composing and delivering emit their events."""
        view_engines.append(text_engine)
        mailer.to.append("customer@example.com")

        with caplog.at_level(logging.DEBUG, logger="view_mailer"):
            mailer.email("test_view").deliver()

        events = {r.event: r.levelno for r in caplog.records if hasattr(r, "event")}
        assert events == {"composed": logging.DEBUG, "delivered": logging.INFO}

    def test_cancelled_delivery_warns(self, caplog, view_engines, text_engine, mailer):
        """Test a cancelled delivery is logged as a warning."""
        view_engines.append(text_engine)
        mailer.to.append("customer@example.com")
        mailer.on_mail_sending = lambda context: setattr(context, "cancel", True)

        with caplog.at_level(logging.INFO, logger="view_mailer"):
            mailer.email("test_view").deliver()

        [record] = [r for r in caplog.records if getattr(r, "event", None) == "cancelled"]
        assert record.levelno == logging.WARNING
        assert record.view_name == "test_view"
