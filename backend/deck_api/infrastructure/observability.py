"""Structured Logging — JSON and text formatters sharing one set of domain extras.

Invariants:
    - Every record carries timestamp, level, logger name and message
    - Domain extras (user_id, character_id, deck_id, affiliation_id, error_code,
      category, path, reason) appear only when set; anything else passed in extra is dropped
    - setup_logging is idempotent: calling it twice leaves one handler installed

Design Decisions:
    - setup_logging called once on startup via lifespan; tests never call it
    - SQLAlchemy engine echo stays off; its logger is pinned to WARNING
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_KEYS = (
    "user_id", "character_id", "deck_id", "affiliation_id",
    "error_code", "category", "path", "reason",
)

_HANDLER_NAME = "deck_api"


def record_extras(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in EXTRA_KEYS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines for local runs, extras appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = record_extras(record)
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in extras.items())
        return line


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the deck-api handler on the root logger (replacing a prior one)."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
