"""Structured Logging — JSON formatter and setup for the data layer.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - timestamp is when the record was created, not when it was formatted
    - Extra fields (ticket_id, user_id, storage_key, error_code, operation) surfaced when present
    - Passwords and session tokens are never passed as extras
    - JSON format by default, human-readable text on request
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_KEYS = ("ticket_id", "user_id", "storage_key", "error_code", "operation")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure the ticketapp logger. Safe to call more than once."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    root = logging.getLogger("ticketapp")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
