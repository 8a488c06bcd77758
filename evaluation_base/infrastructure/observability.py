"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (command, error_kind, group, exit_code) surfaced when present;
      call sites build them with log_context so the key set lives in EXTRA_KEYS only
    - JSON format in production, human-readable in development

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup via lifespan; repeat calls don't stack handlers
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_KEYS = ("command", "error_kind", "group", "exit_code")

_HANDLER_NAME = "evaluation_base"


def log_context(**fields: str | None) -> dict[str, str]:
    """Build a logging `extra` dict; only EXTRA_KEYS are accepted."""
    unknown = set(fields) - set(EXTRA_KEYS)
    if unknown:
        raise TypeError(f"Unsupported log fields: {', '.join(sorted(unknown))}")
    return {k: v for k, v in fields.items() if v is not None}


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
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
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure logging for the application."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
