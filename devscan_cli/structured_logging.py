"""
Structured logging support.

Provides JSON-formatted logging when enabled via DEVSCAN_LOG_FORMAT=json.
Each scan gets a scan_id so that the records of one pass can be correlated.
"""

import json
import logging
import os
import sys
import uuid
from datetime import datetime
from typing import Any

# LogRecord attributes that are not user-supplied extras
_RESERVED_FIELDS = {
    "name",
    "msg",
    "args",
    "created",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "thread",
    "threadName",
    "taskName",
    "exc_info",
    "exc_text",
    "stack_info",
    "scan_id",
}


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Outputs one JSON object per record with:
    - timestamp: ISO 8601 timestamp
    - level, logger, message
    - scan_id: Optional scan correlation ID
    - file / function / exception when available
    - any extra fields passed to the logger
    """

    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        timestamp = dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{int(record.msecs):03d}Z"

        log_entry: dict[str, Any] = {
            "timestamp": timestamp,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        scan_id = getattr(record, "scan_id", None)
        if scan_id:
            log_entry["scan_id"] = scan_id

        if record.pathname:
            log_entry["file"] = f"{record.filename}:{record.lineno}"

        if record.funcName and record.funcName != "<module>":
            log_entry["function"] = record.funcName

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_FIELDS and not key.startswith("_"):
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


def is_json_logging_enabled() -> bool:
    """True if DEVSCAN_LOG_FORMAT=json"""
    log_format = os.getenv("DEVSCAN_LOG_FORMAT", "text").lower()
    return log_format == "json"


def setup_logging(level: str | None = None, log_file: str | None = None, force: bool = True) -> None:
    """
    Setup logging based on environment variables.

    Environment variables:
    - DEVSCAN_LOG_FORMAT: "json" or "text" (default: text)
    - DEVSCAN_LOG_LEVEL: Log level (default: WARNING)
    - DEVSCAN_LOG_FILE: Optional log file path

    Logs go to stderr so that ``devscan scan --json`` output stays parseable.
    """
    if level is None:
        level = os.getenv("DEVSCAN_LOG_LEVEL", "WARNING")
    level = level.upper()
    if not isinstance(logging.getLevelName(level), int):
        print(f"Warning: Unknown log level {level!r}, using WARNING", file=sys.stderr)
        level = "WARNING"

    if log_file is None:
        log_file = os.getenv("DEVSCAN_LOG_FILE")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file))
        except OSError as e:
            print(f"Warning: Could not open log file {log_file}: {e}", file=sys.stderr)

    if is_json_logging_enabled():
        formatter = JSONFormatter()
        for handler in handlers:
            handler.setFormatter(formatter)
        logging.basicConfig(level=level, handlers=handlers, force=force)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s - %(message)s",
            handlers=handlers,
            force=force,
        )


def new_scan_id() -> str:
    """Short random identifier for one scan pass"""
    return uuid.uuid4().hex[:12]


class ScanLogger(logging.LoggerAdapter):
    """
    Logger adapter that stamps every record with a scan_id.

    Usage:
        log = ScanLogger(logging.getLogger("devscan.scanner"), new_scan_id())
        log.info("Found %d listener(s)", 3)
    """

    def __init__(self, logger: logging.Logger, scan_id: str):
        super().__init__(logger, {"scan_id": scan_id})
        self.scan_id = scan_id

    def process(self, msg, kwargs):
        extra = dict(kwargs.get("extra") or {})
        extra["scan_id"] = self.scan_id
        kwargs["extra"] = extra
        return msg, kwargs
