"""Logging setup for the ``view_mailer`` package logger."""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import LoggingConfig, MailerSettings

PACKAGE_LOGGER = "view_mailer"

#: Level each mailer event is logged at.
EVENT_LEVELS: Dict[str, int] = {
    "composed": logging.DEBUG,
    "delivered": logging.INFO,
    "cancelled": logging.WARNING,
}

#: Libraries whose loggers are held at WARNING.
QUIET_LOGGERS = ("jinja2", "email_validator", "dotenv")

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_installed_handlers: List[logging.Handler] = []


class StructuredFormatter(logging.Formatter):
    """Writes one JSON object per record, event fields included."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Plain text formatter that colours whole lines by level on a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }

    def __init__(self, fmt: str, color: bool = False):
        super().__init__(fmt)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno) if self.color else None
        if color is None:
            return text
        return f"{color}{text}\033[0m"


def log_event(logger: logging.Logger, event: str, message: str, **fields: Any) -> None:
    """Log a mailer event at the level ``EVENT_LEVELS`` assigns it.

    ``fields`` are attached to the record, so the JSON log file carries them
    next to the message.
    """
    logger.log(EVENT_LEVELS[event], message, extra={"event": event, **fields})


def setup_logging(
    config: Optional[LoggingConfig] = None,
    settings: Optional[MailerSettings] = None,
) -> logging.Logger:
    """Configure the ``view_mailer`` logger.

    Handlers go on the package logger only and the root logger is left to
    the application. Calling this again replaces the handlers installed by
    the previous call. With neither console nor file output the package
    logger propagates, so records reach whatever the application set up.

    At the default INFO level deliveries and cancelled deliveries are
    reported; DEBUG adds view resolution and rendering.

    Args:
        config: Logging configuration (uses settings.logging if not provided)
        settings: Mailer settings

    Returns:
        The package logger
    """
    if settings is not None:
        config = settings.logging
    if config is None:
        config = LoggingConfig()

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in _installed_handlers:
        logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    logger.setLevel(config.level.upper())

    if config.console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            ConsoleFormatter(config.format, color=sys.stderr.isatty())
        )
        _installed_handlers.append(console_handler)

    if config.file_path:
        log_file = Path(config.file_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(StructuredFormatter())
        _installed_handlers.append(file_handler)

    for handler in _installed_handlers:
        logger.addHandler(handler)
    logger.propagate = not _installed_handlers

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
