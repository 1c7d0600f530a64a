"""Structured Logging — JSON formatter and setup for card service observability.

Invariants:
    - Every record carries timestamp, level, logger, message and service name
    - Card context extras (card_id, owner_id, slug, operation, ...) surfaced when present
    - setup_logging() is idempotent: calling it twice never duplicates handlers
"""

import logging
import json
from datetime import datetime, timezone


SERVICE_NAME = "cardsmith-api"

_EXTRA_FIELDS = (
    "card_id", "owner_id", "slug", "error_code", "operation", "path", "link_count",
)

# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log[key] = str(val)
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class _CardsmithHandler(logging.StreamHandler):
    """Marker type so setup_logging() can find its own handler."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _CardsmithHandler)]:
        root.removeHandler(existing)

    handler = _CardsmithHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
