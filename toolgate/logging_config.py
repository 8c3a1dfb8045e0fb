"""Structured JSON logging support for ToolGate."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from toolgate.config.settings import ToolGateSettings, get_settings


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON for production log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def configure_logging(settings: ToolGateSettings | None = None) -> None:
    """Configure the ``toolgate`` logger from TOOLGATE_LOG_FORMAT and TOOLGATE_LOG_LEVEL."""
    settings = settings or get_settings()
    log_format = settings.log_format.lower()
    log_level = settings.log_level.upper()

    logger = logging.getLogger("toolgate")
    logger.setLevel(log_level)

    handler = logging.StreamHandler()
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    logger.handlers = [handler]
