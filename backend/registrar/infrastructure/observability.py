"""Structured Logging — one JSON object per log line, with domain fields.

Invariants:
    - Every line carries timestamp (UTC, ISO-8601), level, logger and message
    - Domain extras (entity_kind, entity_id, edge_kind, key_count) and request
      extras (error_code, path) appear only when the caller set them
    - setup_logging is idempotent: a second call replaces its own handler

Design Decisions:
    - Stdlib logging with a small formatter, no logging dependency
    - LOG_FORMAT=text switches to a plain single-line format for local runs
"""

import json
import logging
from datetime import datetime, timezone

DOMAIN_FIELDS = ("entity_kind", "entity_id", "edge_kind", "key_count")
REQUEST_FIELDS = ("error_code", "path")

_TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Render a LogRecord as a compact JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update({
            name: getattr(record, name)
            for name in DOMAIN_FIELDS + REQUEST_FIELDS
            if getattr(record, name, None) is not None
        })
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the root handler; called from the application lifespan."""
    global _handler
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    _handler = logging.StreamHandler()
    _handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    root.addHandler(_handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
