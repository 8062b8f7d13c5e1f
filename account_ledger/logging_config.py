"""
Structured logging configuration.

Every module logs through logging.getLogger(__name__), which
places it under the "account_ledger" logger configured here.
"""

import json
import logging
from datetime import datetime, timezone

ROOT_LOGGER = "account_ledger"

# Attributes a plain LogRecord always has. Anything else came in via extra=
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message"}


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED:
                entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Install a single JSON stream handler on the application logger.

    Safe to call more than once: existing handlers are replaced,
    never duplicated.
    """
    logger = logging.getLogger(ROOT_LOGGER)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    return logger
