"""Logging setup for the fleet billing engine.

Handlers are installed on the ``fleet_billing`` package logger, so the
engine's records are formatted with their billing context (vehicle, month,
run id) while other libraries' loggers are left alone.
"""

import json
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from fleet_billing.utils.logging_utils import ContextFilter

PACKAGE_LOGGER = "fleet_billing"

STANDARD_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Rotation for --log-file
MAX_FILE_SIZE = 10 * 1024 * 1024
BACKUP_COUNT = 5


class ContextFormatter(logging.Formatter):
    """Standard text formatter that appends the record's context fields.

    Example output:
        2025-10-01 09:30:00 - WARNING - fleet_billing.aggregators... - Entry
        outside 9/2025 ignored [correlation_id=3f9c0d2a71b4 month=9 year=2025]
    """

    def __init__(self):
        super().__init__(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)

    def formatMessage(self, record: logging.LogRecord) -> str:
        text = super().formatMessage(record)
        context = getattr(record, "context", None)
        if context:
            fields = " ".join(f"{key}={value}" for key, value in context.items())
            text = f"{text} [{fields}]"
        return text


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Context fields are nested under ``context``. Values JSON cannot encode
    natively (Decimal, date) are written as strings.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string representation of log record
        """
        log_data = {
            "timestamp": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        context = getattr(record, "context", None)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class LoggingConfig:
    """
    Logging options chosen on the command line.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format type ('standard' or 'json')
        log_file: Rotating log file written in addition to stderr (optional)
    """

    VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    VALID_FORMATS = {"standard", "json"}

    def __init__(
        self,
        log_level: str = "WARNING",
        log_format: str = "standard",
        log_file: Optional[Path] = None,
    ):
        """
        Raises:
            ValueError: If invalid log level or format
        """
        if log_level.upper() not in self.VALID_LEVELS:
            raise ValueError(
                f"Invalid log level: {log_level}. "
                f"Must be one of {', '.join(sorted(self.VALID_LEVELS))}"
            )

        if log_format not in self.VALID_FORMATS:
            raise ValueError(
                f"Invalid log format: {log_format}. "
                f"Must be one of {', '.join(sorted(self.VALID_FORMATS))}"
            )

        self.log_level = log_level.upper()
        self.log_format = log_format
        self.log_file = Path(log_file) if log_file else None

    def formatter(self) -> logging.Formatter:
        if self.log_format == "json":
            return JSONFormatter()
        return ContextFormatter()


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """
    Configure the fleet_billing package logger.

    Existing handlers are replaced, so calling this twice does not duplicate
    output. Every handler gets the LogContext filter.

    Args:
        config: LoggingConfig instance (default: WARNING to stderr)
    """
    config = config or LoggingConfig()
    level = getattr(logging, config.log_level)

    reset_logging()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    handlers = [logging.StreamHandler()]
    if config.log_file:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=config.log_file,
                maxBytes=MAX_FILE_SIZE,
                backupCount=BACKUP_COUNT,
                encoding="utf-8",
            )
        )

    formatter = config.formatter()
    context_filter = ContextFilter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        package_logger.addHandler(handler)


def reset_logging() -> None:
    """
    Remove the package handlers and let records propagate unfiltered.

    Useful for testing and cleanup.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.setLevel(logging.NOTSET)
