"""Logging setup for the command line tool and host applications."""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from lmrc_config.config.logging_filters import SensitiveDataFilter


LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra_fields`` become top-level keys."""

    def __init__(self, include_timestamp: bool = True):
        super().__init__()
        self.include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {}
        if self.include_timestamp:
            data['timestamp'] = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        data.update(level=record.levelname, logger=record.name, message=record.getMessage())
        data.update(getattr(record, 'extra_fields', None) or {})
        if record.exc_info:
            data['exception'] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)

class ColoredFormatter(logging.Formatter):
    """Console formatter: ``time LEVEL logger: message  key=value ...``.

    Colours the level name when ``use_color`` is set (callers pass whether
    the stream is a terminal).
    """

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, use_color: bool = True):
        super().__init__(datefmt='%H:%M:%S')
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        if self.use_color and level in self.COLORS:
            level = f"{self.COLORS[level]}{level}{self.RESET}"

        line = f"{self.formatTime(record, self.datefmt)} {level} {record.name}: {record.getMessage()}"
        fields = getattr(record, 'extra_fields', None)
        if fields:
            line += "  " + " ".join(f"{key}={value}" for key, value in fields.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line

def get_file_handler(log_file: str | Path) -> logging.Handler:
    """Rotating JSON file handler; the directory is created if missing."""
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding='utf-8'
    )
    handler.setFormatter(JsonFormatter())
    handler.setLevel(logging.DEBUG)
    return handler

def setup_logging(
    level: str | None = 'WARNING',
    verbose: bool = False,
    log_file: str | Path | None = None,
    json_format: bool = False
) -> None:
    """Replace the root handlers with a masked console handler and optional file.

    Args:
        level: Level name for the console (``LMRC_LOG_LEVEL``)
        verbose: Force DEBUG regardless of ``level``
        log_file: Rotating JSON log file (``LMRC_LOG_FILE`` or ``--log-file``)
        json_format: JSON lines on the console instead of text
    """
    console_level = logging.DEBUG if verbose else logging.getLevelName((level or 'WARNING').upper())
    if not isinstance(console_level, int):
        console_level = logging.WARNING

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    sensitive_filter = SensitiveDataFilter()
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(JsonFormatter() if json_format else ColoredFormatter(use_color=sys.stderr.isatty()))
    console.addFilter(sensitive_filter)
    root_logger.addHandler(console)

    if log_file:
        file_handler = get_file_handler(log_file)
        file_handler.addFilter(sensitive_filter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(logging.DEBUG if log_file else console_level)
