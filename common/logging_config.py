# -*- coding: utf-8 -*-
"""
Logging configuration for the provisioner.

Console output is human-readable. An optional log file receives one JSON
object per record so a build machine's provisioning history can be parsed
later.
"""

import json
import logging
import socket
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_STANDARD_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """
    Formats log records as JSON with a consistent structure:
    timestamp, level, logger, message, source location, host, and any
    fields passed through `extra`.
    """

    def __init__(self, service_name: str = "provisioner"):
        super().__init__()
        self.service_name = service_name
        self.hostname = socket.gethostname()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "hostname": self.hostname,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_ATTRS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(
    service_name: str = "provisioner",
    verbose: bool = False,
    quiet: bool = False,
    log_file_path: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Set up logging for a provisioning run.

    Args:
        service_name: Name of the returned logger.
        verbose: Show debug output on the console.
        quiet: Show only warnings and errors on the console. Copy traces
            are suppressed; the log file, if any, still receives them.
        log_file_path: Path of a JSON-lines log file, or None for console only.

    Returns:
        Configured logger instance
    """
    if quiet:
        console_level = logging.WARNING
    elif verbose:
        console_level = logging.DEBUG
    else:
        console_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if log_file_path else console_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file_path:
        Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter(service_name))
        root_logger.addHandler(file_handler)

    logger = logging.getLogger(service_name)
    logger.debug(
        "Logging initialized",
        extra={
            "console_level": logging.getLevelName(console_level),
            "file_enabled": bool(log_file_path),
        },
    )
    return logger
