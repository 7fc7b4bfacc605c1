"""
Application logging.

API and infrastructure modules log through the standard `logging` tree;
this module configures the root logger once per process (JSON lines in
production, plain text elsewhere) and carries the current request ID in a
context variable so every record emitted while serving a request is tagged
with it.
"""

import json
import logging
import os
import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional
from uuid import uuid4

MAX_REQUEST_ID_LENGTH = 128

request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Attributes every LogRecord has; anything else came in through `extra=`
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime"}

# Loggers that are too chatty below WARNING outside of DEBUG
_QUIET_LOGGERS = ("asyncio", "sqlalchemy.engine", "uvicorn.access", "httpx")


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line.

    Keys: timestamp, level, service, logger, message, request_id (when
    serving a request), exception (when present) and any `extra=` fields.
    """

    def __init__(self, service: str = "boutique", datefmt: Optional[str] = None):
        super().__init__(datefmt=datefmt)
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_ctx.get()
        if request_id:
            entry["request_id"] = request_id

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class _RequestIdFilter(logging.Filter):
    """Expose the request ID to plain-text format strings."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get() or "-"
        return True


def setup_logging(
    level: str = "INFO",
    json_logs: bool = True,
    log_dir: Optional[str] = None,
    service: str = "boutique",
) -> None:
    """
    Configure the root logger.

    Replaces any handlers already installed on the root logger. Lifecycle
    messages go through SystemReporter loggers, which do not propagate and
    are unaffected.

    Args:
        level: Logging level name
        json_logs: JSON lines (True) or plain text (False)
        log_dir: Also write `<service>-api.log` into this directory
        service: Service name stamped on JSON records and the log file
    """
    numeric_level = getattr(logging, level.upper())

    if json_logs:
        formatter: logging.Formatter = JSONFormatter(
            service=service, datefmt="%Y-%m-%dT%H:%M:%S"
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(request_id)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            logging.FileHandler(
                os.path.join(log_dir, f"{service}-api.log"), encoding="utf-8"
            )
        )

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.setLevel(numeric_level)

    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        handler.addFilter(_RequestIdFilter())
        root_logger.addHandler(handler)

    quiet_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_request_id(request_id: Optional[str] = None) -> str:
    """
    Bind a request ID to the current context.

    A missing, empty or oversized incoming ID is replaced with a new UUID.

    Args:
        request_id: ID received from the caller, if any

    Returns:
        The request ID now in effect
    """
    if (
        not request_id
        or len(request_id) > MAX_REQUEST_ID_LENGTH
        or not request_id.isprintable()
    ):
        request_id = str(uuid4())
    request_id_ctx.set(request_id)
    return request_id


def get_request_id() -> Optional[str]:
    return request_id_ctx.get()
