"""Structured Logging — JSON lines for production, key=value text for development.

Invariants:
    - Every line carries timestamp, level, logger and message
    - Contribution context (user_iden, contribution_iden, charge_id, step, ...) is
      emitted whenever a call site passes it through `extra=`
    - Access tokens, Facebook tokens and card tokens are never passed as extras
    - setup_logging replaces root handlers, so calling it twice does not duplicate lines

Design Decisions:
    - stdlib logging only; formatters read extras straight off the LogRecord
    - httpx and stripe request logs capped at WARNING: their INFO lines echo URLs
      that include the Facebook app access token
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_FIELDS = (
    "user_iden",
    "contribution_iden",
    "charge_id",
    "step",
    "store_key",
    "error_code",
    "path",
)

_CHATTY_LOGGERS = ("httpx", "httpcore", "stripe")


def _context_of(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in CONTEXT_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context_of(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class ContextTextFormatter(logging.Formatter):
    """Human-readable line with context appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context_of(record)
        if not context:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        return f"{line} [{pairs}]"


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install a single stderr handler on the root logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextTextFormatter())
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
