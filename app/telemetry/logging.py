"""Structured JSON logging for the advisor service."""

from __future__ import annotations

import json
import logging
import sys

SERVICE_NAME = "incident-advisor"

_LOGGERS = ("advisor", "app")
_UVICORN_LOGGERS = ("uvicorn.access", "uvicorn.error")


class _JsonFormatter(logging.Formatter):
    """One JSON object per line; the message is escaped, exceptions go in ``exc_info``."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": SERVICE_NAME,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_JsonFormatter())

    for name in _LOGGERS:
        named = logging.getLogger(name)
        named.setLevel(level)
        named.handlers = [handler]
        named.propagate = False

    for name in _UVICORN_LOGGERS:
        logging.getLogger(name).handlers = [handler]

    return logging.getLogger("app")
