"""Logging Setup — one JSON object per log line, tagged with who and what.

Invariants:
    - Every line carries timestamp, level, logger, service and message
    - Request context (username, message_id, error_code, path, operation) is
      copied from `extra=` only when set, so lines stay sparse
    - Passwords, hashes and tokens are never passed to a logger
    - setup_logging() replaces its own handler on repeat calls (no duplicate lines)

Design Decisions:
    - stdlib logging with a small formatter; no third-party logging stack
    - SQLAlchemy engine and passlib chatter held at WARNING regardless of level
"""

import json
import logging
from datetime import datetime, timezone

SERVICE_NAME = "messagely-api"

_CONTEXT_FIELDS = ("username", "message_id", "error_code", "path", "operation")
_QUIET_LOGGERS = ("sqlalchemy.engine", "passlib")


class JSONFormatter(logging.Formatter):
    """Render a record and its messaging context as a JSON line."""

    def __init__(self, service: str = SERVICE_NAME):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "message": record.getMessage(),
        }
        for key in _CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                line[key] = value
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


class _MessagelyHandler(logging.StreamHandler):
    """Marker type so setup_logging can find the handler it installed."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the service's stream handler on the root logger."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _MessagelyHandler)]:
        root.removeHandler(existing)

    handler = _MessagelyHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
