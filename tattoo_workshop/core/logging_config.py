# tattoo_workshop/core/logging_config.py
"""Logging setup: structured JSON or plain text, chosen by LOG_FORMAT."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from tattoo_workshop.core.config import get_settings

TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Optional `extra=` fields copied into JSON records
EXTRA_FIELDS = ("appointment_id", "recipient", "notification_type", "request_path")


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs:
    - timestamp (ISO 8601, UTC)
    - level
    - logger (module name)
    - message
    - any of EXTRA_FIELDS passed via `extra=`
    - exception (if exc_info is set)
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def configure_logging() -> None:
    """
    Configure the root logger once at startup.

    Reads LOG_LEVEL and LOG_FORMAT from settings and writes to stderr.
    """
    settings = get_settings()

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    if settings.LOG_FORMAT == "json":
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root_logger.addHandler(console_handler)

    root_logger.info(
        f"Logging configured: level={settings.LOG_LEVEL}, format={settings.LOG_FORMAT}"
    )
