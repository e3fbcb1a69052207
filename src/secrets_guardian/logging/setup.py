"""Logging configuration for secrets-guardian.

Provides structured JSON logging with scan_id correlation. The hook's
stderr is also its diagnostic channel, so unless a log file is configured
only errors are written there.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Optional

from pythonjsonlogger.json import JsonFormatter


# Context variable for scan_id correlation
scan_id_var: ContextVar[str] = ContextVar("scan_id", default="")


class ScanContextFilter(logging.Filter):
    """Filter that adds scan_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add scan_id from context to log record."""
        record.scan_id = scan_id_var.get() or "-"
        return True


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with additional fields."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")
        if "asctime" in log_record:
            log_record["timestamp"] = log_record.pop("asctime")

        log_record["service"] = "secrets-guardian"

        if hasattr(record, "scan_id"):
            log_record["scan_id"] = record.scan_id


def setup_logging(
    level: str = "ERROR",
    json_format: bool = True,
    log_file: Optional[Path | str] = None,
) -> logging.Handler:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Whether to use JSON format.
        log_file: Append logs to this file instead of stderr.

    Returns:
        The installed handler.
    """
    level = level.upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if log_file is not None:
        path = Path(log_file).expanduser()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
        except OSError:
            # Unwritable log file, fall back to stderr errors only
            handler = logging.StreamHandler(sys.stderr)
            level = "ERROR"
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    handler.addFilter(ScanContextFilter())

    if json_format:
        formatter: logging.Formatter = CustomJsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - [%(scan_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Configured logger instance.
    """
    return logging.getLogger(name)


def new_scan_id() -> str:
    """Generate and set a fresh scan ID for the current context."""
    scan_id = uuid.uuid4().hex[:12]
    scan_id_var.set(scan_id)
    return scan_id


def set_scan_id(scan_id: str) -> None:
    """Set the scan ID for the current context.

    Args:
        scan_id: Unique invocation identifier.
    """
    scan_id_var.set(scan_id)


def get_scan_id() -> str:
    """Get the current scan ID.

    Returns:
        Current scan ID or empty string.
    """
    return scan_id_var.get()
