"""Structured logging helpers (JSON).

Use `get_logger(__name__)` to emit JSON logs with all extra fields included.
Pass structured fields as ``logger.info("msg", extra={"extra": {...}})``.
"""

from __future__ import annotations

import logging
import os
import orjson


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.args and isinstance(record.args, dict):
            payload.update(record.args)
        if hasattr(record, "extra") and isinstance(getattr(record, "extra"), dict):
            payload.update(getattr(record, "extra"))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=str).decode("utf-8")


def get_logger(name: str = "imageguard") -> logging.Logger:
    """Return a logger under the ``imageguard`` tree.

    The JSON handler lives on the package logger only; module loggers
    propagate to it.
    """
    base = logging.getLogger("imageguard")
    if not base.handlers:
        h = logging.StreamHandler()
        h.setFormatter(JsonFormatter())
        base.addHandler(h)
        level = os.environ.get("IMAGEGUARD_LOG_LEVEL", "INFO").upper()
        base.setLevel(getattr(logging, level, logging.INFO))
    return logging.getLogger(name)
