"""
Logging utilities with ISO 8601 timestamps.

Console output is kept human readable; the optional log file receives one
JSON object per record so runs can be inspected afterwards.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

# Attributes every LogRecord carries; anything else came in through ``extra=``
_RESERVED_ATTRS = {
    'args', 'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName',
    'created', 'msecs', 'relativeCreated', 'levelname', 'levelno',
    'pathname', 'filename', 'module', 'name', 'thread', 'threadName',
    'processName', 'process', 'message', 'msg', 'asctime', 'taskName',
}


def _iso_time(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_ATTRS and not key.startswith('_')
    }


class StructuredFormatter(logging.Formatter):
    """
    Formatter that renders each record as a JSON string.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a JSON string."""
        log_data = {
            'timestamp': _iso_time(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'module': record.module,
            'line': record.lineno,
        }
        log_data.update(_extra_fields(record))

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable formatter: ``timestamp | LEVEL | message``.
    """

    def format(self, record: logging.LogRecord) -> str:
        return f"{_iso_time(record)} | {record.levelname:<8} | {super().format(record)}"


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Set up and configure a logger for one of the command line tools.

    Args:
        name: Name of the logger
        log_file: Path to a JSON-lines log file (optional)
        level: Log level
        stream: Console stream, defaults to stderr so reports on stdout stay clean

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers if any
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setFormatter(ConsoleFormatter())
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        # The file keeps per-probe debug records even when the console does not
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)
        logger.setLevel(min(level, logging.DEBUG))
        console_handler.setLevel(level)

    return logger
