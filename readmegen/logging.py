"""Logging setup for readmegen commands."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

_LOGGER_NAME = "readmegen"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(level: str = "info", fmt: str = "text") -> logging.Logger:
    """Configure the readmegen logger hierarchy to write to stderr.

    Command output goes to stdout, so ``readmegen digest owner/repo > out.txt``
    captures the digest alone.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(_LEVELS.get(level, logging.INFO))
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI runs more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("[readmegen] %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger


__all__ = ["JsonFormatter", "configure_logging"]
