"""Logging setup for the dealer catalog.

Two output modes, both on stderr so stdout stays free for command output:
- JSON lines for log aggregation
- a compact console line that keeps the load context visible

Load events carry their context in `extra`, e.g.
    logger.info("[CATALOG:LOAD] ...", extra={"file": path, "dealer_id": "acme", "records": 12})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any


# Extra fields copied from log records into the output, in display order
STRUCTURED_FIELDS = ("file", "dealer_id", "records", "files", "duration_ms", "pattern", "line_number")


def structured_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Load context attached to `record` via `extra`; unset or None fields are skipped."""
    return {
        key: getattr(record, key)
        for key in STRUCTURED_FIELDS
        if getattr(record, key, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the load context as top-level keys."""

    def __init__(self, *, extra_fields: dict[str, Any] | None = None):
        super().__init__()
        self.extra_fields = extra_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(structured_fields(record))
        log_data.update(self.extra_fields)
        return json.dumps(log_data, ensure_ascii=False, default=str)


class PrettyFormatter(logging.Formatter):
    """Console formatter: `time | LEVEL | message  key=value ...`."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, *, use_color: bool = False):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        timestamp = datetime.now(UTC).strftime("%H:%M:%S")
        output = f"{timestamp} | {level} | {record.getMessage()}"

        context = structured_fields(record)
        if context:
            output += "  " + " ".join(f"{key}={value}" for key, value in context.items())

        if record.exc_info:
            output += f"\n{self.formatException(record.exc_info)}"
        return output


def setup_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    service_name: str = "dealer-catalog",
) -> None:
    """Configure the root logger.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: JSON lines (True) or console lines (False)
        service_name: Added to every JSON record as `service`
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if json_format:
        formatter: logging.Formatter = JSONFormatter(extra_fields={"service": service_name})
    else:
        formatter = PrettyFormatter(use_color=sys.stderr.isatty())
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
